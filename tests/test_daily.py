"""Tests for half-day series."""
from datetime import date

from tace.engine.daily import compute_daily_metrics, scan_daily, initial_state, working_day_slots
from tace.engine.rates import RatePolicy, daily_rate
from tace.models.config import AnalysisConfig
from tace.models.metrics import StatusCounts

from conftest import make_grid

NOV_11 = 45972  # Armistice, Tuesday
NOV_12 = 45973


class TestDailyMetrics:
    """Tests for compute_daily_metrics."""

    def test_two_records_per_working_day(self, october_grid):
        daily = compute_daily_metrics(october_grid, "Octobre 2025")
        assert [m.date_label for m in daily] == [
            "01/10/2025 Matin",
            "01/10/2025 Après-midi",
            "02/10/2025 Matin",
            "02/10/2025 Après-midi",
        ]
        assert daily[0].day == date(2025, 10, 1)
        assert daily[0].sort_key == "2025-10-01"
        assert daily[0].day_label == "01/10/2025"

    def test_cumulative_working_days(self, october_grid):
        daily = compute_daily_metrics(october_grid, "Octobre 2025")
        assert [m.cumulative_working_days for m in daily] == [0.5, 1.0, 1.5, 2.0]

    def test_counts_one_unit_per_person(self, october_grid):
        daily = compute_daily_metrics(october_grid, "Octobre 2025")
        assert daily[0].counts.absences == 1
        assert daily[1].counts.interne == 1
        assert daily[2].counts.non_affected == 1
        assert daily[3].counts.prevision == 1
        assert daily[0].cell_counts["front_ecommerce"].absences == 1
        assert daily[0].cell_counts["back_sur_mesure"].absences == 0

    def test_cumulative_is_running_sum(self, october_grid):
        daily = compute_daily_metrics(october_grid, "Octobre 2025")
        running = StatusCounts()
        for m in daily:
            running = running + m.counts
            assert m.cumulative == running
        assert daily[-1].cell_cumulative["front_ecommerce"] == StatusCounts(
            absences=1, non_affected=1, prevision=1
        )

    def test_headcount_fixed(self, october_grid):
        daily = compute_daily_metrics(october_grid, "Octobre 2025")
        assert daily[0].headcount["total"] == 2
        assert daily[0].headcount["front"] == 1
        assert daily[0].headcount["back_sur_mesure"] == 1
        assert all(m.headcount == daily[0].headcount for m in daily)

    def test_rates(self, october_grid):
        daily = compute_daily_metrics(october_grid, "Octobre 2025")
        assert daily_rate(daily[0], "total") == 100.0
        assert daily_rate(daily[0], "front") == 0.0
        assert daily_rate(daily[2], "total") == 50.0
        assert daily_rate(daily[3], "total") == 50.0
        assert daily_rate(daily[3], "total", RatePolicy.ESTIMATED) == 100.0

    def test_unparseable_label_has_no_slots(self, october_grid):
        assert compute_daily_metrics(october_grid, "Feuil1") == []


class TestHolidayPolicy:
    def _grid(self):
        return make_grid([NOV_11, NOV_12], [("A", "", "CdP", "CDS", ["X"] * 4)])

    def test_holidays_skipped_by_default(self):
        daily = compute_daily_metrics(self._grid(), "Novembre 2025")
        assert {m.day for m in daily} == {date(2025, 11, 12)}

    def test_holidays_kept_when_disabled(self):
        config = AnalysisConfig(skip_holidays_in_daily=False)
        slots = working_day_slots(self._grid(), "Novembre 2025", config)
        assert [s.day for s in slots] == [date(2025, 11, 11), date(2025, 11, 12)]


class TestScanDaily:
    def test_empty_events(self):
        assert scan_daily(initial_state({"total": 0}, ()), []) == []
