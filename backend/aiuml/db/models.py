from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    requirements = Column(Text)
    user_id = Column(Integer, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    diagrams = relationship(
        "Diagram",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    pattern_suggestions = relationship(
        "PatternSuggestion",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="PatternSuggestion.position",
    )


class Diagram(Base):
    __tablename__ = "diagrams"

    id = Column(Integer, primary_key=True)
    type = Column(String(32))  # CLASS, SEQUENCE, USE_CASE, GENERIC
    notation = Column(String(16), default="mermaid")
    source = Column(Text)
    project_id = Column(Integer, ForeignKey("projects.id"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="diagrams")


class PatternSuggestion(Base):
    __tablename__ = "pattern_suggestions"

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    explanation = Column(Text)
    position = Column(Integer, default=0)
    project_id = Column(Integer, ForeignKey("projects.id"))

    project = relationship("Project", back_populates="pattern_suggestions")
