from typing import Iterable, Optional

from aiuml.db.models import Project
from aiuml.patterns import PatternEntry


def serialize_patterns(entries: Iterable[PatternEntry]) -> list[dict]:
    """Order preserved; duplicates kept."""
    return [entry.to_dict() for entry in entries]


def serialize_diagram(dialect: str, notation: str, source: str) -> dict:
    return {"type": dialect, "notation": notation, "source": source}


def serialize_project(project: Project) -> dict:
    latest: Optional[dict] = None
    if project.diagrams:
        diagram = max(project.diagrams, key=lambda d: d.id)
        latest = serialize_diagram(diagram.type, diagram.notation, diagram.source)

    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "requirements": project.requirements,
        "user_id": project.user_id,
        "latest_diagram": latest,
        "patterns": [
            {"name": p.name, "explanation": p.explanation}
            for p in project.pattern_suggestions
        ],
    }
