import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from aiuml.api.serializers import serialize_diagram, serialize_patterns, serialize_project
from aiuml.db.repository import ProjectRepository
from aiuml.db.session import get_db
from aiuml.documents.extractor import extract_text
from aiuml.pipeline.context import DiagramDialect, DiagramNotation
from aiuml.pipeline.controller import AnalysisController
from aiuml.schemas import (
    AnalyzeResponse,
    DiagramResponse,
    GenerateRequest,
    PatternsResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    RequirementsRequest,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_controller() -> AnalysisController:
    return AnalysisController()


def get_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


# ============================
# Stateless generation
# ============================

@router.post("/api/diagrams/generate", response_model=DiagramResponse)
def generate_diagram(
    request: GenerateRequest,
    controller: AnalysisController = Depends(get_controller),
):
    source = controller.generate_diagram(
        request.requirements,
        request.diagram_type,
        request.notation,
    )
    return serialize_diagram(
        DiagramDialect.parse(request.diagram_type).value,
        DiagramNotation.parse(request.notation).value,
        source,
    )


@router.post("/api/patterns/detect", response_model=PatternsResponse)
def detect_patterns(
    request: RequirementsRequest,
    controller: AnalysisController = Depends(get_controller),
):
    entries = controller.detect_patterns(request.requirements)
    return {"patterns": serialize_patterns(entries)}


# ============================
# Projects
# ============================

@router.post("/api/projects", response_model=ProjectResponse)
def create_project(
    request: ProjectCreate,
    repo: ProjectRepository = Depends(get_repository),
):
    logger.info("[API: POST] Create Project: %s", request.name, extra={"stage": "api"})
    project = repo.create(
        name=request.name,
        description=request.description,
        requirements=request.requirements,
        user_id=request.user_id,
    )
    return serialize_project(project)


@router.get("/api/projects/user/{user_id}", response_model=List[ProjectResponse])
def list_user_projects(user_id: int, repo: ProjectRepository = Depends(get_repository)):
    return [serialize_project(p) for p in repo.list_by_owner(user_id)]


@router.delete("/api/projects/user/{user_id}")
def delete_user_projects(user_id: int, repo: ProjectRepository = Depends(get_repository)):
    return {"deleted": repo.delete_by_owner(user_id)}


@router.get("/api/projects/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, repo: ProjectRepository = Depends(get_repository)):
    return serialize_project(repo.get(project_id))


@router.put("/api/projects/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    request: ProjectUpdate,
    repo: ProjectRepository = Depends(get_repository),
):
    project = repo.update(project_id, **request.model_dump())
    return serialize_project(project)


@router.delete("/api/projects/{project_id}", status_code=204)
def delete_project(project_id: int, repo: ProjectRepository = Depends(get_repository)):
    repo.delete(project_id)


@router.post("/api/projects/{project_id}/analyze", response_model=AnalyzeResponse)
def analyze_project(
    project_id: int,
    request: GenerateRequest,
    repo: ProjectRepository = Depends(get_repository),
    controller: AnalysisController = Depends(get_controller),
):
    logger.info("[API: POST] Analyze Project ID: %s", project_id, extra={"stage": "api"})

    # 404 before spending any model calls
    repo.get(project_id)

    result = controller.analyze(
        request.requirements,
        request.diagram_type,
        request.notation,
    )

    repo.save_analysis(
        project_id,
        requirements=request.requirements,
        diagram_type=result.dialect.value,
        notation=result.notation.value,
        source=result.diagram,
        patterns=result.patterns,
    )

    return {
        "plantUml": result.diagram,
        "diagram": serialize_diagram(result.dialect.value, result.notation.value, result.diagram),
        "patterns": serialize_patterns(result.patterns),
    }


@router.post("/api/projects/{project_id}/upload", response_model=UploadResponse)
def upload_requirements(project_id: int, file: UploadFile = File(...)):
    data = file.file.read()
    return {"content": extract_text(data, file.filename)}


@router.get("/health")
def health():
    return {"status": "ok"}
