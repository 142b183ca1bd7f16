"""
Month keys, entry dates and Sunday-aligned week windows.

A month view is covered by consecutive 7-day windows (Sunday..Saturday).
The first window starts on the Sunday on or before the 1st, the last one
contains the month's last day. Windows keep their neighbouring-month days;
filtering those out is the accumulator's job.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List

from timekeeper.domain.errors import InvalidInputError

MONTH_KEY_RE = re.compile(r"^\d{4}-\d{2}$")
DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class WeekWindow:
    week_index: int
    start_date: date
    end_date: date

    def days(self) -> List[date]:
        return [self.start_date + timedelta(days=i) for i in range(DAYS_IN_WEEK)]


def parse_month_key(month: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month."""
    if not isinstance(month, str) or not MONTH_KEY_RE.match(month):
        raise InvalidInputError(f"Invalid month: {month!r} (expected YYYY-MM)")
    try:
        return datetime.strptime(f"{month}-01", "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInputError(f"Invalid month: {month!r} (expected YYYY-MM)") from None


def parse_entry_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` into a calendar date."""
    if not isinstance(value, str) or not DATE_KEY_RE.match(value):
        raise InvalidInputError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInputError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def date_key(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def month_bounds(first_day: date) -> tuple[date, date]:
    """Return (first_day, last_day) of the month starting at first_day."""
    if first_day.month == 12:
        next_month = date(first_day.year + 1, 1, 1)
    else:
        next_month = date(first_day.year, first_day.month + 1, 1)
    return first_day, next_month - timedelta(days=1)


def sunday_on_or_before(d: date) -> date:
    # date.weekday(): Monday=0 .. Sunday=6
    offset_from_sunday = (d.weekday() + 1) % 7
    return d - timedelta(days=offset_from_sunday)


def partition_month(month: str) -> List[WeekWindow]:
    """Split a month into Sunday..Saturday windows covering every day of it."""
    first_day = parse_month_key(month)

    windows: List[WeekWindow] = []
    try:
        _, last_day = month_bounds(first_day)
        week_start = sunday_on_or_before(first_day)
        index = 1
        while week_start <= last_day:
            windows.append(WeekWindow(
                week_index=index,
                start_date=week_start,
                end_date=week_start + timedelta(days=DAYS_IN_WEEK - 1),
            ))
            week_start += timedelta(days=DAYS_IN_WEEK)
            index += 1
    except (ValueError, OverflowError):
        # weeks of the first and last supported months run past date.min / date.max
        raise InvalidInputError(f"Month out of supported range: {month!r}") from None
    return windows
