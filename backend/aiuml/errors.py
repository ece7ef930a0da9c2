from typing import Optional


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration (e.g. missing API key). Never retried."""


class TransientProviderError(Exception):
    """
    One backend candidate failed (bad status, transport fault, empty text).
    Absorbed by the generation client, which moves on to the next candidate.
    """

    def __init__(self, candidate, reason: str, status_code: Optional[int] = None):
        super().__init__(f"{candidate}: {reason}")
        self.candidate = candidate
        self.reason = reason
        self.status_code = status_code


class ExhaustionError(Exception):
    """Every candidate failed for a pipeline stage."""

    def __init__(self, stage: str, detail: str):
        super().__init__(detail)
        self.stage = stage
        self.detail = detail


class ProjectNotFoundError(LookupError):
    def __init__(self, project_id: int):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
