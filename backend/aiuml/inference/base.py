from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from aiuml.inference.candidates import ModelCandidate


@dataclass(frozen=True)
class GenerationResult:
    text: str
    succeeded: bool
    candidate_used: Optional[ModelCandidate] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.succeeded and not self.text.strip():
            raise ValueError("A successful generation must carry non-blank text")

    @classmethod
    def success(cls, text: str, candidate: ModelCandidate) -> "GenerationResult":
        return cls(text=text, succeeded=True, candidate_used=candidate)

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(text="", succeeded=False, candidate_used=None, error=error)


class TextGenerationClient(ABC):
    @abstractmethod
    def generate(self, prompt: str) -> GenerationResult:
        """Generate text for a single prompt, absorbing per-backend failures"""
        pass
