"""Tests for the weekly carry-forward balance computation"""
from decimal import Decimal

from timekeeper.domain.balances import ProjectAllotment, accumulate_balances
from timekeeper.domain.periods import partition_month


PRJ_1 = ProjectAllotment(project_code_id=1, project_code="PRJ-1001", allotted=Decimal("40"))
PRJ_2 = ProjectAllotment(project_code_id=2, project_code="PRJ-2002", allotted=Decimal("20"))


def _report(month, projects, entries):
    return accumulate_balances(month, partition_month(month), projects, entries)


class TestMarch2024Example:
    def test_first_two_weeks(self):
        entries = {
            (1, "2024-03-01"): Decimal("8"),
            (1, "2024-03-04"): Decimal("8"),
        }
        weeks = _report("2024-03", [PRJ_1], entries)

        assert len(weeks) == 6
        w1, w2 = weeks[0].rows[0], weeks[1].rows[0]
        assert weeks[0].start_date == "2024-02-25"
        assert weeks[0].end_date == "2024-03-02"
        assert (w1.allotted, w1.total, w1.remaining) == (Decimal("40"), Decimal("8"), Decimal("32"))
        assert weeks[1].start_date == "2024-03-03"
        assert (w2.allotted, w2.total, w2.remaining) == (Decimal("32"), Decimal("8"), Decimal("24"))

        # nothing else logged: balance stays at 24 for the rest of the month
        for week in weeks[2:]:
            row = week.rows[0]
            assert row.allotted == Decimal("24")
            assert row.remaining == Decimal("24")
            assert row.total == 0


class TestOutOfMonthDays:
    def test_spillover_days_ignored(self):
        # 2024-02-26 and 2024-04-01 sit in the first/last windows but not in March
        entries = {
            (1, "2024-02-26"): Decimal("5"),
            (1, "2024-04-01"): Decimal("7"),
            (1, "2024-03-02"): Decimal("1.5"),
        }
        weeks = _report("2024-03", [PRJ_1], entries)

        first = weeks[0].rows[0]
        assert first.total == Decimal("1.5")
        assert set(first.days) == {"2024-03-01", "2024-03-02"}

        last = weeks[-1].rows[0]
        assert set(last.days) == {"2024-03-31"}
        assert last.total == 0
        assert last.remaining == Decimal("38.5")

    def test_days_map_has_month_local_dates_only(self):
        weeks = _report("2024-03", [PRJ_1], {})
        all_days = [d for w in weeks for d in w.rows[0].days]
        assert len(all_days) == 31
        assert len(set(all_days)) == 31
        assert all(d.startswith("2024-03-") for d in all_days)

    def test_missing_entries_are_zero(self):
        weeks = _report("2024-03", [PRJ_1], {})
        row = weeks[1].rows[0]
        assert all(v == 0 for v in row.days.values())
        assert row.total == 0
        assert row.allotted == row.remaining == Decimal("40")


class TestCarryForward:
    def test_invariants_hold_for_every_row(self):
        entries = {
            (1, "2024-03-05"): Decimal("9.25"),
            (1, "2024-03-12"): Decimal("30"),
            (1, "2024-03-20"): Decimal("12.75"),   # overshoots the allotment
            (2, "2024-03-07"): Decimal("-2"),      # negative values are not rejected
            (2, "2024-03-28"): Decimal("0.1"),
        }
        weeks = _report("2024-03", [PRJ_1, PRJ_2], entries)

        for week in weeks:
            for row in week.rows:
                assert row.remaining == row.allotted - row.total
        for prev, nxt in zip(weeks, weeks[1:]):
            for a, b in zip(prev.rows, nxt.rows):
                assert a.project_code_id == b.project_code_id
                assert b.allotted == a.remaining

        assert weeks[-1].rows[0].remaining == Decimal("40") - Decimal("52")
        assert weeks[-1].rows[1].remaining == Decimal("20") - Decimal("-1.9")

    def test_projects_are_independent(self):
        entries = {(2, "2024-03-04"): Decimal("20")}
        weeks = _report("2024-03", [PRJ_1, PRJ_2], entries)

        assert [r.project_code for r in weeks[1].rows] == ["PRJ-1001", "PRJ-2002"]
        assert weeks[1].rows[0].remaining == Decimal("40")
        assert weeks[1].rows[1].remaining == Decimal("0")

    def test_each_call_starts_from_zero(self):
        entries = {(1, "2024-03-04"): Decimal("8")}
        first = _report("2024-03", [PRJ_1], entries)
        second = _report("2024-03", [PRJ_1], entries)
        assert first[0].rows[0].allotted == second[0].rows[0].allotted == Decimal("40")
        assert first == second

    def test_no_projects_gives_empty_rows(self):
        weeks = _report("2024-03", [], {})
        assert len(weeks) == 6
        assert all(w.rows == [] for w in weeks)
