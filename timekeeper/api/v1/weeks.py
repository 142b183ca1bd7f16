"""
Weekly report and day entry API endpoints
"""
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr
from sqlalchemy.orm import Session

from timekeeper.api.deps import get_db, get_current_user
from timekeeper.application.time_entries import SetDayHoursUseCase
from timekeeper.application.week_report import WeekReportService
from timekeeper.domain.balances import WeekSlice
from timekeeper.infrastructure.db.models import User
from timekeeper.utils.validation import format_hours


router = APIRouter(prefix="/api/v1", tags=["weeks"])


# === Request/Response models ===

class SetDayHoursRequest(BaseModel):
    project_code_id: int
    date: str  # YYYY-MM-DD
    hours: StrictStr | StrictInt | StrictFloat


class WeekRowResponse(BaseModel):
    project_code_id: int
    project_code: str
    allotted: str  # starting balance carried from prior weeks
    days: dict[str, str]
    total: str
    remaining: str


class WeekSliceResponse(BaseModel):
    week_index: int
    start_date: str
    end_date: str
    rows: list[WeekRowResponse]


def _slice_response(week: WeekSlice) -> WeekSliceResponse:
    return WeekSliceResponse(
        week_index=week.week_index,
        start_date=week.start_date,
        end_date=week.end_date,
        rows=[
            WeekRowResponse(
                project_code_id=r.project_code_id,
                project_code=r.project_code,
                allotted=format_hours(r.allotted),
                days={d: format_hours(h) for d, h in r.days.items()},
                total=format_hours(r.total),
                remaining=format_hours(r.remaining),
            )
            for r in week.rows
        ],
    )


# === Endpoints ===

@router.get("/weeks", response_model=list[WeekSliceResponse])
def get_weeks(
    month: str = Query(..., description="YYYY-MM"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Sunday..Saturday weeks of the month with per-project balances"""
    return [_slice_response(w) for w in WeekReportService(db).get_weeks(month)]


@router.put("/entries")
def set_day_hours(
    req: SetDayHoursRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Set (upsert) the hours logged for a project on a date"""
    SetDayHoursUseCase(db).execute(req.project_code_id, req.date, req.hours)
    return {"status": "ok"}
