"""Tests for cross-month consolidation."""
from datetime import date

import pytest

from tace.engine.consolidate import (
    aggregate_daily_metrics,
    consolidate_daily_metrics,
    group_by_day,
    merge_monthly_summaries,
)
from tace.models.metrics import DailyMetrics, MonthlySummary, MonthlyTotals, SpecificTeamRates, StatusCounts


def _slot(day, half_day="Matin", absences=0, headcount=2):
    return DailyMetrics(
        date_label=f"{day:%d/%m/%Y} {half_day}",
        day=day,
        half_day=half_day,
        column=5,
        headcount={"total": headcount},
        counts=StatusCounts(absences=absences),
        cumulative=StatusCounts(absences=absences),
    )


class TestDailyConsolidation:
    """Tests for day-level grouping across months."""

    def test_chronological_across_years(self):
        january = [_slot(date(2026, 1, 2))]
        december = [_slot(date(2025, 12, 31))]
        consolidated = consolidate_daily_metrics({"Janvier 2026": january, "Décembre 2025": december})
        assert [c.sort_key for c in consolidated] == ["2025-12-31", "2026-01-02"]
        assert consolidated[0].date_label == "31/12/2025"

    def test_half_days_are_averaged(self):
        day = date(2025, 10, 1)
        consolidated = consolidate_daily_metrics([[
            _slot(day, "Matin", absences=2),
            _slot(day, "Après-midi", absences=0),
        ]])
        assert len(consolidated) == 1
        assert consolidated[0].slot_count == 2
        assert consolidated[0].values["absences"] == 1
        assert consolidated[0].values["headcount_total"] == 2

    def test_group_by_day_sorted(self):
        groups = group_by_day([_slot(date(2025, 10, 3)), _slot(date(2025, 10, 1))])
        assert list(groups) == ["2025-10-01", "2025-10-03"]

    def test_aggregated_rates(self):
        day = date(2025, 10, 1)
        rows = aggregate_daily_metrics(
            [_slot(day, "Matin", absences=1), _slot(day, "Après-midi")], rate_names=["total"]
        )
        assert len(rows) == 1
        assert rows[0].rates == {"total": 100.0}

    def test_empty(self):
        assert consolidate_daily_metrics({}) == []
        assert aggregate_daily_metrics([]) == []


class TestMonthlySummaries:
    """Tests for merge_monthly_summaries."""

    def _summary(self, month, real, estimated):
        return MonthlySummary(
            month=month,
            totals=MonthlyTotals(real, estimated),
            specific_rates=SpecificTeamRates(90.0, 90.0, 90.0, 90.0),
        )

    def test_order_and_trends(self):
        merged = merge_monthly_summaries([
            self._summary("Janvier 2026", 80.0, 90.0),
            self._summary("Décembre 2025", 85.5, 92.0),
        ])
        assert [s.month for s in merged] == ["Décembre 2025", "Janvier 2026"]
        assert merged[0].trends is None
        assert merged[1].trends["real_rate"] == pytest.approx(-5.5)
        assert merged[1].trends["estimated_rate"] == pytest.approx(-2.0)
        assert merged[1].trends["front_ecommerce_rate"] == 0.0

    def test_inputs_not_mutated(self):
        summary = self._summary("Octobre 2025", 80.0, 90.0)
        merge_monthly_summaries([self._summary("Septembre 2025", 70.0, 80.0), summary])
        assert summary.trends is None

    def test_missing_totals_have_no_global_trend(self):
        merged = merge_monthly_summaries([
            MonthlySummary("Septembre 2025"),
            self._summary("Octobre 2025", 80.0, 90.0),
        ])
        assert "real_rate" not in merged[1].trends
        assert merged[0].real_rate is None
