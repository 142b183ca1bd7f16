"""
Yearly metrics API endpoint
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from timekeeper.api.deps import get_db, get_current_user
from timekeeper.application.metrics import YearMetricsService
from timekeeper.infrastructure.db.models import User
from timekeeper.utils.validation import format_hours


router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


class ProjectMetricsResponse(BaseModel):
    project_code: str
    monthly_totals: list[str]
    yearly_total: str
    avg_monthly: str
    avg_daily: str


class YearMetricsResponse(BaseModel):
    year: int
    days_in_year: int
    projects: list[ProjectMetricsResponse]


def _fmt(value) -> str:
    return str(round(value, 2))


@router.get("/{year}", response_model=YearMetricsResponse)
def get_year_metrics(
    year: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Hours per project per month for a year, with averages"""
    data = YearMetricsService(db).compute(year)
    return YearMetricsResponse(
        year=data["year"],
        days_in_year=data["days_in_year"],
        projects=[
            ProjectMetricsResponse(
                project_code=p["project_code"],
                monthly_totals=[format_hours(t) for t in p["monthly_totals"]],
                yearly_total=format_hours(p["yearly_total"]),
                avg_monthly=_fmt(p["avg_monthly"]),
                avg_daily=_fmt(p["avg_daily"]),
            )
            for p in data["projects"]
        ],
    )
