"""
Weekly carry-forward balance computation.

Each project's allotment for the month is consumed week by week:

  allotted(week 1)   = resolved month allotment
  remaining(week N)  = allotted(week N) - total(week N)
  allotted(week N+1) = remaining(week N)

Only days inside the target month are counted, even though the windows
themselves run Sunday..Saturday across the month boundary.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Tuple

from timekeeper.domain.periods import WeekWindow, date_key

ZERO = Decimal("0")


@dataclass(frozen=True)
class ProjectAllotment:
    """A project annotated with its effective allotment for one month."""
    project_code_id: int
    project_code: str
    allotted: Decimal


@dataclass
class WeeklyProjectRow:
    project_code_id: int
    project_code: str
    allotted: Decimal  # carried-forward starting balance, not the raw allotment
    days: Dict[str, Decimal]
    total: Decimal
    remaining: Decimal


@dataclass
class WeekSlice:
    week_index: int
    start_date: str
    end_date: str
    rows: List[WeeklyProjectRow] = field(default_factory=list)


def accumulate_balances(
    month: str,
    windows: Iterable[WeekWindow],
    projects: Iterable[ProjectAllotment],
    hours_by_key: Mapping[Tuple[int, str], Decimal],
) -> List[WeekSlice]:
    """
    Build the per-week, per-project report for ``month``.

    Args:
        month: month key (``YYYY-MM``) used as the in-month date prefix
        windows: week windows in index order
        projects: projects in display order with their resolved allotment
        hours_by_key: (project_code_id, ``YYYY-MM-DD``) -> logged hours

    Returns:
        One WeekSlice per window, each with one row per project
    """
    projects = list(projects)
    cumulative: Dict[int, Decimal] = {}
    out: List[WeekSlice] = []

    for window in windows:
        day_keys = [date_key(d) for d in window.days()]
        in_month = [ds for ds in day_keys if ds.startswith(month)]

        rows: List[WeeklyProjectRow] = []
        for project in projects:
            pid = project.project_code_id
            days = {ds: hours_by_key.get((pid, ds), ZERO) for ds in in_month}
            total_in_month = sum(days.values(), ZERO)

            consumed = cumulative.get(pid, ZERO)
            start_balance = project.allotted - consumed
            remaining = start_balance - total_in_month
            cumulative[pid] = consumed + total_in_month

            rows.append(WeeklyProjectRow(
                project_code_id=pid,
                project_code=project.project_code,
                allotted=start_balance,
                days=days,
                total=total_in_month,
                remaining=remaining,
            ))

        out.append(WeekSlice(
            week_index=window.week_index,
            start_date=date_key(window.start_date),
            end_date=date_key(window.end_date),
            rows=rows,
        ))
    return out
