"""Tests for DataFrame and chart adapters."""
import pandas as pd

from tace.engine.pipeline import process_months
from tace.models.metrics import TeamMetrics
from tace.ui.charts import daily_rates_chart, monthly_rates_chart, project_distribution_chart
from tace.ui.tables import (
    daily_rates_frame,
    daily_table,
    expertise_table,
    format_rate,
    project_table,
    rate_level,
    summary_table,
    team_table,
)


class TestFormatting:
    def test_rate_level(self):
        assert rate_level(90.0) == "good"
        assert rate_level(85.0) == "good"
        assert rate_level(70.0) == "average"
        assert rate_level(69.99) == "low"
        assert rate_level(None) == ""

    def test_format_rate(self):
        assert format_rate(97.8) == "97.8 %"
        assert format_rate(None) == "—"


class TestTables:
    """Tests for the tabular views of a processed month."""

    def test_team_table(self, october_grid):
        result = process_months({"Octobre 2025": october_grid}).months[0]
        df = team_table(result.team_metrics)
        assert list(df.columns) == ["Indicateur", "Valeur", "Type"]
        assert df.iloc[0]["Indicateur"] == "TOTAL CDS"
        assert df.iloc[1]["Valeur"] == "97.8 %"
        assert (df["Type"] == "title").sum() == 5

    def test_empty_team_has_single_row(self):
        df = team_table([TeamMetrics("Equipe CdP")])
        assert df["Indicateur"].tolist() == ["EQUIPE CDP", "Collaborateurs"]

    def test_expertise_table(self, october_grid):
        result = process_months({"Octobre 2025": october_grid}).months[0]
        df = expertise_table(result.expertise_metrics)
        assert "FRONT E-COMMERCE" in df["Indicateur"].tolist()

    def test_daily_table_columns(self, october_grid):
        result = process_months({"Octobre 2025": october_grid}).months[0]
        df = daily_table(result.daily_metrics)
        assert list(df.columns)[0] == "01/10/2025 Matin"
        assert df.loc["Collaborateurs CDS", "01/10/2025 Matin"] == 2
        assert df.loc["Taux réel Total CDS", "02/10/2025 Matin"] == 50.0

    def test_project_table(self, october_grid):
        result = process_months({"Octobre 2025": october_grid}).months[0]
        df = project_table(result.project_stats)
        assert df["Projet"].tolist() == ["ProjetX", "ProjetY"]
        assert project_table([]).empty

    def test_summary_and_daily_frames(self, october_grid):
        report = process_months({"Octobre 2025": october_grid})
        summary = summary_table(report.summaries)
        assert summary.loc[0, "Mois"] == "Octobre 2025"
        assert summary.loc[0, "Taux réel"] == 97.8

        frame = daily_rates_frame(report.daily_rates)
        assert list(frame.columns) == ["Date", "Série", "Taux"]
        assert frame["Date"].iloc[0] == pd.Timestamp("2025-10-01")


class TestCharts:
    def test_figures(self, october_grid):
        report = process_months({"Octobre 2025": october_grid})
        result = report.months[0]

        assert len(monthly_rates_chart(report.summaries).data) == 2
        filtered = daily_rates_chart(report.daily_rates, ["Total CDS", "Front"])
        assert {trace.name for trace in filtered.data} == {"Total CDS", "Front"}
        assert len(project_distribution_chart(result.project_stats).data) == 4
