"""
Project code use-cases, month allotment overrides and read service.
"""
import logging
from decimal import Decimal
from typing import List, Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from timekeeper.domain.errors import ConflictError, InvalidInputError, NotFoundError
from timekeeper.domain.periods import parse_month_key
from timekeeper.infrastructure.db.models import ProjectCode, ProjectMonthAllotment
from timekeeper.utils.validation import hours_from_store, parse_hours

logger = logging.getLogger(__name__)


SAMPLE_PROJECTS = (
    ("PRJ-1001", Decimal("40")),
    ("PRJ-2002", Decimal("20")),
)


def get_project(db: Session, project_id: int) -> ProjectCode:
    project = db.query(ProjectCode).filter(ProjectCode.id == project_id).first()
    if not project:
        raise NotFoundError(f"Project {project_id} not found")
    return project


def _normalize_code(code: str) -> str:
    code = (code or "").strip()
    if not code:
        raise InvalidInputError("Project code must not be empty")
    return code


def _default_allotment(value) -> Decimal:
    hours = parse_hours(value)
    if hours < 0:
        raise InvalidInputError("Default allotment must be >= 0")
    return hours


def _ensure_code_free(db: Session, code: str, exclude_id: int | None = None) -> None:
    q = db.query(ProjectCode).filter(ProjectCode.code == code)
    if exclude_id is not None:
        q = q.filter(ProjectCode.id != exclude_id)
    if q.first():
        raise ConflictError(f"Project code already exists: {code}")


# ── Use Cases ──

class CreateProjectUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, code: str, allotted_hours: str | Decimal = "0") -> int:
        code = _normalize_code(code)
        allotted = _default_allotment(allotted_hours)
        _ensure_code_free(self.db, code)

        project = ProjectCode(code=code, allotted_hours=float(allotted))
        self.db.add(project)
        try:
            self.db.flush()
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Project code already exists: {code}") from None

        logger.info("Created project %s (id=%d, allotted=%s)", code, project.id, allotted)
        return project.id


class UpdateProjectUseCase:
    """Rename a project code and/or change its default allotment."""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, project_id: int, **changes) -> None:
        project = get_project(self.db, project_id)

        # validate everything before touching the row
        values = {}
        if "code" in changes:
            values["code"] = _normalize_code(changes["code"])
            _ensure_code_free(self.db, values["code"], exclude_id=project_id)
        if "allotted_hours" in changes:
            values["allotted_hours"] = float(_default_allotment(changes["allotted_hours"]))

        for attr, value in values.items():
            setattr(project, attr, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Project code already exists: {changes.get('code')}") from None

        logger.info("Updated project id=%d: %s", project_id, sorted(changes))


class DeleteProjectUseCase:
    """Hard delete; overrides and time entries go with it (ON DELETE CASCADE)."""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, project_id: int) -> None:
        get_project(self.db, project_id)

        self.db.query(ProjectCode).filter(
            ProjectCode.id == project_id,
        ).delete(synchronize_session="fetch")
        self.db.commit()

        logger.info("Deleted project id=%d", project_id)


class SetProjectMonthAllotmentUseCase:
    """Set (upsert) the allotment override for one project + month."""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, project_id: int, month: str, allotted_hours: str | Decimal) -> None:
        parse_month_key(month)
        hours = parse_hours(allotted_hours)
        get_project(self.db, project_id)

        row = self.db.query(ProjectMonthAllotment).filter(
            ProjectMonthAllotment.project_code_id == project_id,
            ProjectMonthAllotment.month == month,
        ).first()
        if row:
            row.allotted_hours = float(hours)
        else:
            self.db.add(ProjectMonthAllotment(
                project_code_id=project_id,
                month=month,
                allotted_hours=float(hours),
            ))
        self.db.commit()

        logger.info("Set allotment override project id=%d month=%s hours=%s", project_id, month, hours)


def ensure_sample_projects(db: Session) -> int:
    """Seed the sample project codes if the table is empty. Returns rows created."""
    if db.query(ProjectCode).count() > 0:
        return 0
    for code, allotted in SAMPLE_PROJECTS:
        db.add(ProjectCode(code=code, allotted_hours=float(allotted)))
    db.commit()
    logger.info("Seeded %d sample project codes", len(SAMPLE_PROJECTS))
    return len(SAMPLE_PROJECTS)


# ── Read Service ──

class ProjectReadService:
    """Read-only queries for project codes and their overrides."""

    def __init__(self, db: Session):
        self.db = db

    def list_projects(self) -> List[Dict[str, Any]]:
        projects = self.db.query(ProjectCode).order_by(ProjectCode.id).all()
        return [
            {"id": p.id, "code": p.code, "allotted": hours_from_store(p.allotted_hours)}
            for p in projects
        ]

    def list_allotments(self, project_id: int) -> List[Dict[str, Any]]:
        """Overrides for a project, most recent month first."""
        get_project(self.db, project_id)
        rows = (
            self.db.query(ProjectMonthAllotment)
            .filter(ProjectMonthAllotment.project_code_id == project_id)
            .order_by(ProjectMonthAllotment.month.desc())
            .all()
        )
        return [{"month": r.month, "allotted": hours_from_store(r.allotted_hours)} for r in rows]
