"""
Yearly metrics: hours per project per month, yearly total and averages.

Built from the same month reports the weekly view uses, so the numbers
always agree with what the weeks show.
"""
import calendar
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from timekeeper.application.week_report import WeekReportService
from timekeeper.domain.errors import InvalidInputError

MONTHS_IN_YEAR = 12
ZERO = Decimal("0")


def _days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


class YearMetricsService:
    def __init__(self, db: Session):
        self.db = db

    def compute(self, year: int) -> Dict[str, Any]:
        if not 1 <= year <= 9999:
            raise InvalidInputError(f"Invalid year: {year}")

        report = WeekReportService(self.db)
        monthly: Dict[str, List[Decimal]] = {}

        for month_idx in range(MONTHS_IN_YEAR):
            month = f"{year:04d}-{month_idx + 1:02d}"
            for week in report.get_weeks(month):
                for row in week.rows:
                    totals = monthly.setdefault(row.project_code, [ZERO] * MONTHS_IN_YEAR)
                    totals[month_idx] += row.total

        days_in_year = _days_in_year(year)
        projects = []
        for code in sorted(monthly):
            yearly_total = sum(monthly[code], ZERO)
            projects.append({
                "project_code": code,
                "monthly_totals": monthly[code],
                "yearly_total": yearly_total,
                "avg_monthly": yearly_total / MONTHS_IN_YEAR,
                "avg_daily": yearly_total / days_in_year,
            })

        return {"year": year, "days_in_year": days_in_year, "projects": projects}
