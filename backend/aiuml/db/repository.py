from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from aiuml.db.models import Diagram, PatternSuggestion, Project
from aiuml.errors import ProjectNotFoundError
from aiuml.patterns import PatternEntry

UPDATABLE_FIELDS = ("name", "description", "requirements")


class ProjectRepository:
    """Plain CRUD over projects plus storage of analysis output."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        requirements: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Project:
        project = Project(
            name=name,
            description=description,
            requirements=requirements,
            user_id=user_id,
        )
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def get(self, project_id: int) -> Project:
        project = self.db.get(Project, project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def list_by_owner(self, user_id: int) -> List[Project]:
        return (
            self.db.query(Project)
            .filter(Project.user_id == user_id)
            .order_by(Project.id)
            .all()
        )

    def update(self, project_id: int, **changes) -> Project:
        """Only non-None values for mutable fields are applied."""
        project = self.get(project_id)
        for key in UPDATABLE_FIELDS:
            value = changes.get(key)
            if value is not None:
                setattr(project, key, value)
        self.db.commit()
        self.db.refresh(project)
        return project

    def delete(self, project_id: int) -> None:
        project = self.db.get(Project, project_id)
        if project is not None:
            self.db.delete(project)
            self.db.commit()

    def delete_by_owner(self, user_id: int) -> int:
        projects = self.list_by_owner(user_id)
        for project in projects:
            self.db.delete(project)
        self.db.commit()
        return len(projects)

    def save_analysis(
        self,
        project_id: int,
        requirements: str,
        diagram_type: str,
        notation: str,
        source: str,
        patterns: Iterable[PatternEntry],
    ) -> Project:
        project = self.get(project_id)
        project.requirements = requirements
        project.diagrams.append(
            Diagram(type=diagram_type, notation=notation, source=source)
        )

        # Latest analysis replaces earlier suggestions
        project.pattern_suggestions.clear()
        for position, entry in enumerate(patterns):
            project.pattern_suggestions.append(
                PatternSuggestion(
                    name=entry.name,
                    explanation=entry.explanation,
                    position=position,
                )
            )

        self.db.commit()
        self.db.refresh(project)
        return project
