from pydantic import BaseModel, field_validator
from typing import Optional, List


class RequirementsRequest(BaseModel):
    requirements: str

    @field_validator("requirements")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("requirements must not be blank")
        return value


class GenerateRequest(RequirementsRequest):
    diagram_type: str = "CLASS"  # CLASS | SEQUENCE | USE_CASE | anything else -> GENERIC
    notation: str = "mermaid"  # mermaid | plantuml


class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    requirements: Optional[str] = None
    user_id: Optional[int] = None


class ProjectUpdate(BaseModel):
    """Only non-null fields are applied"""
    name: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None


class PatternResponse(BaseModel):
    name: str
    explanation: str


class DiagramResponse(BaseModel):
    type: str
    notation: str
    source: str


class ProjectResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    requirements: Optional[str] = None
    user_id: Optional[int] = None
    latest_diagram: Optional[DiagramResponse] = None
    patterns: List[PatternResponse] = []


class AnalyzeResponse(BaseModel):
    plantUml: str  # diagram source, field name kept for frontend compatibility
    diagram: DiagramResponse
    patterns: List[PatternResponse]


class PatternsResponse(BaseModel):
    patterns: List[PatternResponse]


class UploadResponse(BaseModel):
    content: str
