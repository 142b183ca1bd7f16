"""
Seed sample project codes, an override and a month of time entries.
Run:  python seed_test_data.py [YYYY-MM]
"""
import sys
from datetime import timedelta

# ── bootstrap ────────────────────────────────────────────────────
from timekeeper.infrastructure.db.session import get_session_factory, init_db
from timekeeper.infrastructure.db.models import ProjectCode
from timekeeper.application.projects import ensure_sample_projects, SetProjectMonthAllotmentUseCase
from timekeeper.application.time_entries import SetDayHoursUseCase
from timekeeper.application.week_report import WeekReportService
from timekeeper.domain.periods import parse_month_key, month_bounds, date_key

MONTH = sys.argv[1] if len(sys.argv) > 1 else "2024-03"

init_db()
db = get_session_factory()()

ensure_sample_projects(db)
projects = {p.code: p.id for p in db.query(ProjectCode).all()}
if "PRJ-1001" not in projects or "PRJ-2002" not in projects:
    print("Sample codes PRJ-1001 / PRJ-2002 not found"); sys.exit(1)

# PRJ-2002 gets a bigger budget this month
SetProjectMonthAllotmentUseCase(db).execute(projects["PRJ-2002"], MONTH, "30")

# ═══════════════════════════════════════════════════════════════
# Weekdays: 6h on PRJ-1001, 2h on PRJ-2002
# ═══════════════════════════════════════════════════════════════
first_day, last_day = month_bounds(parse_month_key(MONTH))
d = first_day
while d <= last_day:
    if d.weekday() < 5:
        SetDayHoursUseCase(db).execute(projects["PRJ-1001"], date_key(d), "6")
        SetDayHoursUseCase(db).execute(projects["PRJ-2002"], date_key(d), "2")
    d += timedelta(days=1)

for week in WeekReportService(db).get_weeks(MONTH):
    print(f"Week {week.week_index}: {week.start_date} .. {week.end_date}")
    for row in week.rows:
        print(f"  {row.project_code}: start {row.allotted}, logged {row.total}, left {row.remaining}")

db.close()
print("\nDone!")
