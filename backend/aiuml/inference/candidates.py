from dataclasses import dataclass
from typing import Iterable, Tuple

from aiuml.config import GEMINI_API_VERSIONS, GEMINI_MODELS


@dataclass(frozen=True)
class ModelCandidate:
    """One (api version, model) target tried during fallback."""
    api_version: str
    model: str

    def __str__(self) -> str:
        return f"{self.api_version}/{self.model}"


def build_candidates(
    versions: Iterable[str],
    models: Iterable[str],
) -> Tuple[ModelCandidate, ...]:
    """
    Cartesian product in preference order: every model of the first
    version, then every model of the next one.
    """
    models = list(models)
    return tuple(
        ModelCandidate(api_version=v, model=m)
        for v in versions
        for m in models
    )


DEFAULT_CANDIDATES = build_candidates(GEMINI_API_VERSIONS, GEMINI_MODELS)
