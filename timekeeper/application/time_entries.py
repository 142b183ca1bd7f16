"""
Day entry use-case: hours logged against a project on a date.
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from timekeeper.application.projects import get_project
from timekeeper.domain.periods import parse_entry_date, date_key
from timekeeper.infrastructure.db.models import TimeEntry
from timekeeper.utils.validation import parse_hours

logger = logging.getLogger(__name__)


class SetDayHoursUseCase:
    """Set (upsert) the hours for one project + date; replaces any prior value."""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, project_id: int, date: str, hours: str | Decimal) -> None:
        entry_date = date_key(parse_entry_date(date))
        value = parse_hours(hours)
        get_project(self.db, project_id)

        entry = self.db.query(TimeEntry).filter(
            TimeEntry.project_code_id == project_id,
            TimeEntry.entry_date == entry_date,
        ).first()
        if entry:
            entry.hours = float(value)
        else:
            self.db.add(TimeEntry(
                project_code_id=project_id,
                entry_date=entry_date,
                hours=float(value),
            ))
        self.db.commit()

        logger.info("Set %s hours for project id=%d on %s", value, project_id, entry_date)
