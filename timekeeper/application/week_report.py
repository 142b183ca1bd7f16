"""
Month report: Sunday-aligned weeks with carry-forward balances per project.

Recomputed from the store on every call; nothing is cached between calls.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from timekeeper.application.projects import get_project
from timekeeper.domain.balances import ProjectAllotment, WeekSlice, accumulate_balances
from timekeeper.domain.periods import parse_month_key, partition_month
from timekeeper.infrastructure.db.models import ProjectCode, ProjectMonthAllotment, TimeEntry
from timekeeper.utils.validation import hours_from_store

logger = logging.getLogger(__name__)


def resolve_allotment(db: Session, project_id: int, month: str) -> Decimal:
    """Month override for the project if one exists, else its default allotment."""
    parse_month_key(month)
    project = get_project(db, project_id)

    override = db.query(ProjectMonthAllotment.allotted_hours).filter(
        ProjectMonthAllotment.project_code_id == project_id,
        ProjectMonthAllotment.month == month,
    ).scalar()
    if override is not None:
        return hours_from_store(override)
    return hours_from_store(project.allotted_hours)


def list_projects_with_month_allotment(db: Session, month: str) -> List[ProjectAllotment]:
    """All projects ordered by code, each with its effective allotment for the month."""
    rows = (
        db.query(
            ProjectCode.id,
            ProjectCode.code,
            func.coalesce(ProjectMonthAllotment.allotted_hours, ProjectCode.allotted_hours),
        )
        .outerjoin(
            ProjectMonthAllotment,
            and_(
                ProjectMonthAllotment.project_code_id == ProjectCode.id,
                ProjectMonthAllotment.month == month,
            ),
        )
        .order_by(ProjectCode.code)
        .all()
    )
    return [
        ProjectAllotment(project_code_id=pid, project_code=code, allotted=hours_from_store(allotted))
        for pid, code, allotted in rows
    ]


def list_day_entries_for_month(db: Session, month: str) -> Dict[Tuple[int, str], Decimal]:
    """(project_code_id, YYYY-MM-DD) -> hours for every entry dated in the month."""
    rows = (
        db.query(TimeEntry.project_code_id, TimeEntry.entry_date, TimeEntry.hours)
        .filter(TimeEntry.entry_date.like(f"{month}-%"))
        .all()
    )
    return {(pid, entry_date): hours_from_store(hours) for pid, entry_date, hours in rows}


class WeekReportService:
    def __init__(self, db: Session):
        self.db = db

    def get_weeks(self, month: str) -> List[WeekSlice]:
        windows = partition_month(month)
        projects = list_projects_with_month_allotment(self.db, month)
        hours_by_key = list_day_entries_for_month(self.db, month)

        logger.debug(
            "Week report %s: %d weeks, %d projects, %d entries",
            month, len(windows), len(projects), len(hours_by_key),
        )
        return accumulate_balances(month, windows, projects, hours_by_key)
