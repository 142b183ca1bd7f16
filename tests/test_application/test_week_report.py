"""
Tests for WeekReportService: month report read from the store.
"""
import pytest
from decimal import Decimal

from timekeeper.application.projects import (
    CreateProjectUseCase, DeleteProjectUseCase, SetProjectMonthAllotmentUseCase,
)
from timekeeper.application.time_entries import SetDayHoursUseCase
from timekeeper.application.week_report import (
    WeekReportService, resolve_allotment, list_projects_with_month_allotment,
)
from timekeeper.domain.errors import InvalidInputError, NotFoundError
from timekeeper.infrastructure.db.models import TimeEntry


@pytest.fixture
def projects(db_session):
    return {
        "PRJ-2002": CreateProjectUseCase(db_session).execute(code="PRJ-2002", allotted_hours="20"),
        "PRJ-1001": CreateProjectUseCase(db_session).execute(code="PRJ-1001", allotted_hours="40"),
    }


def _row(weeks, week_index, code):
    week = next(w for w in weeks if w.week_index == week_index)
    return next(r for r in week.rows if r.project_code == code)


class TestResolveAllotment:
    def test_default_without_override(self, db_session, projects):
        assert resolve_allotment(db_session, projects["PRJ-1001"], "2024-03") == Decimal("40")

    def test_override_for_that_month_only(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetProjectMonthAllotmentUseCase(db_session).execute(pid, "2024-03", "12")
        assert resolve_allotment(db_session, pid, "2024-03") == Decimal("12")
        assert resolve_allotment(db_session, pid, "2024-04") == Decimal("40")

    def test_zero_override_is_not_ignored(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetProjectMonthAllotmentUseCase(db_session).execute(pid, "2024-03", "0")
        assert resolve_allotment(db_session, pid, "2024-03") == Decimal("0")

    def test_unknown_project(self, db_session):
        with pytest.raises(NotFoundError):
            resolve_allotment(db_session, 404, "2024-03")

    def test_bulk_listing_matches_single_lookup(self, db_session, projects):
        SetProjectMonthAllotmentUseCase(db_session).execute(projects["PRJ-2002"], "2024-03", "33")
        listed = list_projects_with_month_allotment(db_session, "2024-03")

        assert [p.project_code for p in listed] == ["PRJ-1001", "PRJ-2002"]
        for p in listed:
            assert p.allotted == resolve_allotment(db_session, p.project_code_id, "2024-03")


class TestGetWeeks:
    def test_march_2024_example(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-01", "8")
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-04", "8")

        weeks = WeekReportService(db_session).get_weeks("2024-03")

        assert len(weeks) == 6
        assert (weeks[0].start_date, weeks[0].end_date) == ("2024-02-25", "2024-03-02")
        w1 = _row(weeks, 1, "PRJ-1001")
        assert (w1.allotted, w1.total, w1.remaining) == (Decimal("40"), Decimal("8"), Decimal("32"))
        w2 = _row(weeks, 2, "PRJ-1001")
        assert (w2.allotted, w2.total, w2.remaining) == (Decimal("32"), Decimal("8"), Decimal("24"))

    def test_rows_ordered_by_code(self, db_session, projects):
        weeks = WeekReportService(db_session).get_weeks("2024-03")
        for week in weeks:
            assert [r.project_code for r in week.rows] == ["PRJ-1001", "PRJ-2002"]

    def test_round_trip_entry(self, db_session, projects):
        pid = projects["PRJ-2002"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-13", "3.75")

        weeks = WeekReportService(db_session).get_weeks("2024-03")
        hits = [
            (w.week_index, d, h)
            for w in weeks for r in w.rows if r.project_code_id == pid
            for d, h in r.days.items() if h != 0
        ]
        assert hits == [(3, "2024-03-13", Decimal("3.75"))]

    def test_overwrite_keeps_latest_value(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-05", "8")
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-05", "2.5")

        assert db_session.query(TimeEntry).filter_by(project_code_id=pid).count() == 1
        weeks = WeekReportService(db_session).get_weeks("2024-03")
        assert _row(weeks, 2, "PRJ-1001").total == Decimal("2.5")
        assert _row(weeks, 6, "PRJ-1001").remaining == Decimal("37.5")

    def test_override_drives_first_week(self, db_session, projects):
        SetProjectMonthAllotmentUseCase(db_session).execute(projects["PRJ-2002"], "2024-03", "30")
        weeks = WeekReportService(db_session).get_weeks("2024-03")
        assert _row(weeks, 1, "PRJ-2002").allotted == Decimal("30")
        assert _row(weeks, 1, "PRJ-1001").allotted == Decimal("40")

        april = WeekReportService(db_session).get_weeks("2024-04")
        assert _row(april, 1, "PRJ-2002").allotted == Decimal("20")

    def test_adjacent_month_entries_do_not_count(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-02-26", "8")
        SetDayHoursUseCase(db_session).execute(pid, "2024-04-02", "8")

        weeks = WeekReportService(db_session).get_weeks("2024-03")
        assert _row(weeks, 1, "PRJ-1001").total == 0
        assert _row(weeks, 6, "PRJ-1001").total == 0
        assert _row(weeks, 6, "PRJ-1001").remaining == Decimal("40")

        # the same entries count in their own months
        feb = WeekReportService(db_session).get_weeks("2024-02")
        assert sum(r.total for w in feb for r in w.rows if r.project_code_id == pid) == Decimal("8")

    def test_deleted_project_disappears(self, db_session, projects):
        pid = projects["PRJ-2002"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-04", "4")
        DeleteProjectUseCase(db_session).execute(pid)

        weeks = WeekReportService(db_session).get_weeks("2024-03")
        for week in weeks:
            assert [r.project_code for r in week.rows] == ["PRJ-1001"]

    def test_invalid_month(self, db_session, projects):
        with pytest.raises(InvalidInputError):
            WeekReportService(db_session).get_weeks("2024-13")

    def test_set_hours_invalid_date(self, db_session, projects):
        with pytest.raises(InvalidInputError):
            SetDayHoursUseCase(db_session).execute(projects["PRJ-1001"], "2024-02-30", "1")
        assert db_session.query(TimeEntry).count() == 0

    def test_set_hours_unknown_project(self, db_session):
        with pytest.raises(NotFoundError):
            SetDayHoursUseCase(db_session).execute(77, "2024-03-01", "1")

    def test_zero_and_negative_hours_allowed(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-04", "0")
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-05", "-1.5")
        weeks = WeekReportService(db_session).get_weeks("2024-03")
        assert _row(weeks, 2, "PRJ-1001").total == Decimal("-1.5")
        assert _row(weeks, 2, "PRJ-1001").remaining == Decimal("41.5")

    def test_precise_hours_kept_as_given(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-04", 0.1 + 0.2)
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-05", "0.125")
        weeks = WeekReportService(db_session).get_weeks("2024-03")
        row = _row(weeks, 2, "PRJ-1001")
        assert row.days["2024-03-04"] == Decimal("0.30000000000000004")
        assert row.days["2024-03-05"] == Decimal("0.125")
        assert row.remaining == row.allotted - row.total
        assert _row(weeks, 3, "PRJ-1001").allotted == row.remaining

    def test_large_and_tiny_hours(self, db_session, projects):
        pid = projects["PRJ-1001"]
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-04", 1e-05)
        SetDayHoursUseCase(db_session).execute(pid, "2024-03-05", "1e8")
        weeks = WeekReportService(db_session).get_weeks("2024-03")
        row = _row(weeks, 2, "PRJ-1001")
        assert row.days["2024-03-04"] == Decimal("0.00001")
        assert row.days["2024-03-05"] == Decimal("100000000")
