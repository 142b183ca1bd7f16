"""
Project code API endpoints
"""
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr
from sqlalchemy.orm import Session

from timekeeper.api.deps import get_db, get_current_user
from timekeeper.application.projects import (
    CreateProjectUseCase, UpdateProjectUseCase, DeleteProjectUseCase,
    SetProjectMonthAllotmentUseCase, ProjectReadService, get_project,
)
from timekeeper.application.week_report import resolve_allotment
from timekeeper.infrastructure.db.models import User
from timekeeper.utils.validation import format_hours, hours_from_store


router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


# === Request/Response models ===

class CreateProjectRequest(BaseModel):
    code: str
    allotted: StrictStr | StrictInt | StrictFloat = "0"  # default monthly allotment, hours


class UpdateProjectRequest(BaseModel):
    code: str | None = None
    allotted: StrictStr | StrictInt | StrictFloat | None = None


class SetAllotmentRequest(BaseModel):
    allotted: StrictStr | StrictInt | StrictFloat


class ProjectResponse(BaseModel):
    id: int
    code: str
    allotted: str  # Decimal as string


class AllotmentResponse(BaseModel):
    month: str
    allotted: str


class EffectiveAllotmentResponse(BaseModel):
    project_code_id: int
    month: str
    allotted: str


def _project_response(db: Session, project_id: int) -> ProjectResponse:
    p = get_project(db, project_id)
    return ProjectResponse(id=p.id, code=p.code, allotted=format_hours(hours_from_store(p.allotted_hours)))


# === Endpoints ===

@router.get("/", response_model=list[ProjectResponse])
def list_projects(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """All project codes, oldest first"""
    return [
        ProjectResponse(id=p["id"], code=p["code"], allotted=format_hours(p["allotted"]))
        for p in ProjectReadService(db).list_projects()
    ]


@router.post("/", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    req: CreateProjectRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Add a project code"""
    project_id = CreateProjectUseCase(db).execute(code=req.code, allotted_hours=req.allotted)
    return _project_response(db, project_id)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    req: UpdateProjectRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Rename a project code and/or change its default allotment"""
    changes = {}
    if req.code is not None:
        changes["code"] = req.code
    if req.allotted is not None:
        changes["allotted_hours"] = req.allotted
    UpdateProjectUseCase(db).execute(project_id, **changes)
    return _project_response(db, project_id)


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a project code with its overrides and time entries"""
    DeleteProjectUseCase(db).execute(project_id)
    return {"status": "deleted"}


@router.get("/{project_id}/allotments", response_model=list[AllotmentResponse])
def list_allotments(
    project_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Month overrides, most recent month first"""
    return [
        AllotmentResponse(month=a["month"], allotted=format_hours(a["allotted"]))
        for a in ProjectReadService(db).list_allotments(project_id)
    ]


@router.put("/{project_id}/allotments/{month}", response_model=AllotmentResponse)
def set_allotment(
    project_id: int,
    month: str,
    req: SetAllotmentRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Set (upsert) the allotment override for a month"""
    SetProjectMonthAllotmentUseCase(db).execute(project_id, month, req.allotted)
    allotted = resolve_allotment(db, project_id, month)
    return AllotmentResponse(month=month, allotted=format_hours(allotted))


@router.get("/{project_id}/allotments/{month}/effective", response_model=EffectiveAllotmentResponse)
def get_effective_allotment(
    project_id: int,
    month: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Override for the month if set, else the default allotment"""
    allotted = resolve_allotment(db, project_id, month)
    return EffectiveAllotmentResponse(project_code_id=project_id, month=month, allotted=format_hours(allotted))
