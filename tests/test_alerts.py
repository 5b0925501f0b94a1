"""Tests for threshold and trend alerts."""
from tace.engine.alerts import AlertLevel, check_prolonged_decline, generate_alerts
from tace.models.config import AnalysisConfig
from tace.models.metrics import MonthlySummary, MonthlyTotals, SpecificTeamRates


def _summary(month, real, specific=90.0, trends=None):
    return MonthlySummary(
        month=month,
        totals=MonthlyTotals(real, real + 5),
        specific_rates=SpecificTeamRates(specific, specific, specific, specific),
        trends=trends,
    )


class TestGenerateAlerts:
    """Tests for generate_alerts."""

    def test_no_summaries(self):
        assert generate_alerts([]) == []

    def test_all_good(self):
        alerts = generate_alerts([_summary("Octobre 2025", 90.0)])
        assert len(alerts) == 1
        assert alerts[0].level == AlertLevel.INFO
        assert alerts[0].title == "Excellentes performances"

    def test_critical_global_rate(self):
        alerts = generate_alerts([_summary("Octobre 2025", 60.0)])
        assert [a.level for a in alerts] == [AlertLevel.CRITICAL]
        assert alerts[0].metric == "Taux global réel"
        assert "60.0%" in alerts[0].message

    def test_warning_below_optimal(self):
        alerts = generate_alerts([_summary("Octobre 2025", 80.0)])
        assert alerts[0].level == AlertLevel.WARNING
        assert alerts[0].title == "Taux global réel en baisse"

    def test_steep_decline(self):
        alerts = generate_alerts([_summary("Octobre 2025", 90.0, trends={"real_rate": -6.0})])
        assert alerts[0].title == "Taux global réel en forte baisse"
        assert "6.0%" in alerts[0].message

    def test_sorted_by_priority(self):
        alerts = generate_alerts([_summary("Octobre 2025", 80.0, specific=50.0)])
        levels = [a.level for a in alerts]
        assert levels[:4] == [AlertLevel.CRITICAL] * 4
        assert levels[-1] == AlertLevel.WARNING

    def test_custom_thresholds(self):
        config = AnalysisConfig(critical_threshold=50.0, warning_threshold=60.0)
        alerts = generate_alerts([_summary("Octobre 2025", 55.0)], config)
        assert alerts[0].level == AlertLevel.WARNING

    def test_missing_totals_skip_global_check(self):
        alerts = generate_alerts([MonthlySummary("Octobre 2025", specific_rates=SpecificTeamRates(
            90.0, 90.0, 90.0, 90.0))])
        assert alerts[0].level == AlertLevel.INFO


class TestProlongedDecline:
    def test_three_falling_months(self):
        summaries = [_summary("Août 2025", 95.0), _summary("Septembre 2025", 92.0),
                     _summary("Octobre 2025", 90.0)]
        alert = check_prolonged_decline(summaries)
        assert alert.level == AlertLevel.WARNING
        assert alert.month == "Octobre 2025"
        assert any(a.title == "Tendance négative prolongée" for a in generate_alerts(summaries))

    def test_not_enough_months(self):
        assert check_prolonged_decline([_summary("Octobre 2025", 90.0)]) is None

    def test_recovery_breaks_decline(self):
        summaries = [_summary("Août 2025", 95.0), _summary("Septembre 2025", 90.0),
                     _summary("Octobre 2025", 92.0)]
        assert check_prolonged_decline(summaries) is None
