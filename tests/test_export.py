"""Tests for Excel export."""
import io

import pytest
from openpyxl import load_workbook

from tace.io.excel_export import HEADER_ROW, export_dashboard, export_projects
from tace.models.metrics import MonthlySummary, MonthlyTotals, ProjectStatistics, SpecificTeamRates


@pytest.fixture
def summaries():
    return [
        MonthlySummary("Septembre 2025", MonthlyTotals(88.0, 92.0), SpecificTeamRates(90.0, 80.0, 60.0, 95.0)),
        MonthlySummary("Octobre 2025", None, SpecificTeamRates(), trends={"real_rate": -2.5}),
    ]


@pytest.fixture
def project_stats():
    return [
        ProjectStatistics("ProjetX", total_days=3.0, front_days=1.0, back_days=2.0),
        ProjectStatistics("ProjetY", total_days=1.5, cdp_days=1.5),
    ]


class TestDashboardExport:
    """Tests for export_dashboard."""

    def test_sheets(self, tmp_path, summaries):
        path = tmp_path / "dashboard.xlsx"
        export_dashboard(summaries, path)
        wb = load_workbook(path)
        assert wb.sheetnames == ["Résumé", "Par Équipe", "Tendances"]

    def test_summary_rows(self, summaries):
        buffer = io.BytesIO()
        export_dashboard(summaries, buffer)
        buffer.seek(0)
        ws = load_workbook(buffer)["Résumé"]

        assert ws.cell(row=HEADER_ROW, column=1).value == "Mois"
        assert ws.cell(row=HEADER_ROW + 1, column=1).value == "Septembre 2025"
        assert ws.cell(row=HEADER_ROW + 1, column=2).value == 88.0
        # Missing totals and trends are shown as "-"
        assert ws.cell(row=HEADER_ROW + 1, column=4).value == "-"
        assert ws.cell(row=HEADER_ROW + 2, column=2).value == "-"
        assert ws.cell(row=HEADER_ROW + 2, column=4).value == -2.5

    def test_rate_fill(self, summaries):
        buffer = io.BytesIO()
        export_dashboard(summaries, buffer)
        buffer.seek(0)
        ws = load_workbook(buffer)["Par Équipe"]
        good = ws.cell(row=HEADER_ROW + 1, column=2)
        low = ws.cell(row=HEADER_ROW + 1, column=4)
        assert good.fill.start_color.rgb.endswith("D4EDDA")
        assert low.fill.start_color.rgb.endswith("F8D7DA")


class TestProjectExport:
    def test_total_row(self, project_stats):
        buffer = io.BytesIO()
        export_projects(project_stats, "Octobre 2025", buffer)
        buffer.seek(0)
        ws = load_workbook(buffer)["Projets"]

        assert "Octobre 2025" in ws.cell(row=1, column=1).value
        assert ws.cell(row=HEADER_ROW + 1, column=1).value == "ProjetX"
        total_row = HEADER_ROW + 3
        assert ws.cell(row=total_row, column=1).value == "TOTAL"
        assert ws.cell(row=total_row, column=2).value == 4.5
        assert ws.cell(row=total_row, column=5).value == 1.5
        assert ws.cell(row=total_row, column=1).font.bold
