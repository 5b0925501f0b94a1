"""Excel export of monthly summaries and project statistics."""
import io
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..models.metrics import MonthlySummary, ProjectStatistics
from ..models.rules import RULES
from ..ui.tables import rate_level
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)

Output = Union[str, Path, io.BytesIO]

TITLE_PREFIX = "DASHBOARD TACE"
HEADER_ROW = 3

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)

SPECIFIC_KEYS = (
    ("front_ecommerce_rate", "Front E-commerce (%)"),
    ("back_ecommerce_rate", "Back E-commerce (%)"),
    ("front_sur_mesure_rate", "Front Sur mesure (%)"),
    ("back_sur_mesure_rate", "Back Sur mesure (%)"),
)


def _pct(value: Optional[float]) -> Any:
    return "-" if value is None else round(value, 1)


def _rate_fill(value: Any) -> Optional[PatternFill]:
    if not isinstance(value, (int, float)):
        return None
    color = RULES.rate_colors.get(rate_level(value), "").lstrip("#")
    if not color:
        return None
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _write_table(ws, title: str, headers: List[str], rows: List[List[Any]], rate_cols: Sequence[int] = ()):
    """Title on row 1, headers on row 3, data below."""
    ws.cell(row=1, column=1, value=title).font = Font(bold=True, size=12)
    for j, header in enumerate(headers, start=1):
        cell = ws.cell(row=HEADER_ROW, column=j, value=header)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = BORDER_THIN

    for i, row_data in enumerate(rows, start=HEADER_ROW + 1):
        for j, value in enumerate(row_data, start=1):
            cell = ws.cell(row=i, column=j, value=value)
            cell.border = BORDER_THIN
            if j > 1:
                cell.alignment = Alignment(horizontal="center")
            if j in rate_cols:
                fill = _rate_fill(value)
                if fill:
                    cell.fill = fill

    ws.column_dimensions["A"].width = 24
    for j in range(2, len(headers) + 1):
        ws.column_dimensions[get_column_letter(j)].width = 18
    ws.freeze_panes = f"B{HEADER_ROW + 1}"


def _save(wb: Workbook, output: Output) -> None:
    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))


def export_dashboard(summaries: Sequence[MonthlySummary], output: Output) -> None:
    """
    Export monthly summaries to a workbook.

    Sheets: Résumé (global rates), Par Équipe (expertise cell rates),
    Tendances (month-over-month deltas in points).
    """
    wb = Workbook()

    # ========== Summary Sheet ==========
    ws = wb.active
    ws.title = "Résumé"
    rows = []
    for s in summaries:
        trend = (s.trends or {}).get("real_rate")
        rows.append([s.month, _pct(s.real_rate), _pct(s.estimated_rate), _pct(trend)])
    _write_table(
        ws, f"{TITLE_PREFIX} - Résumé Global",
        ["Mois", "Taux Réel (%)", "Taux Estimé (%)", "Tendance Réelle (pts)"],
        rows, rate_cols=(2, 3),
    )
    ws.cell(row=HEADER_ROW + len(rows) + 2, column=1,
            value=f"Exporté le {datetime.now():%d/%m/%Y %H:%M}")

    # ========== Team Sheet ==========
    ws_team = wb.create_sheet("Par Équipe")
    rows = []
    for s in summaries:
        specific = s.specific_rates.to_dict()
        rows.append([s.month] + [_pct(specific[key]) for key, _ in SPECIFIC_KEYS])
    _write_table(
        ws_team, f"{TITLE_PREFIX} - Taux par Équipe",
        ["Mois"] + [label for _, label in SPECIFIC_KEYS],
        rows, rate_cols=(2, 3, 4, 5),
    )

    # ========== Trends Sheet ==========
    ws_trend = wb.create_sheet("Tendances")
    trend_keys = [("real_rate", "Tendance Réelle (pts)"), ("estimated_rate", "Tendance Estimée (pts)")]
    trend_keys += [(key, f"Tend. {label.replace(' (%)', '')} (pts)") for key, label in SPECIFIC_KEYS]
    rows = []
    for s in summaries:
        trends = s.trends or {}
        rows.append([s.month] + [_pct(trends.get(key)) for key, _ in trend_keys])
    _write_table(
        ws_trend, f"{TITLE_PREFIX} - Tendances",
        ["Mois"] + [label for _, label in trend_keys],
        rows,
    )

    _save(wb, output)
    logger.info(f"Dashboard exported: {len(summaries)} months")


def export_projects(stats: Sequence[ProjectStatistics], month: str, output: Output) -> None:
    """Export project statistics of one month, with a total row."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Projets"

    rows = [
        [p.project_name, p.total_days, p.front_days, p.back_days, p.cdp_days, p.design_days]
        for p in stats
    ]
    rows.append([
        "TOTAL",
        sum(p.total_days for p in stats),
        sum(p.front_days for p in stats),
        sum(p.back_days for p in stats),
        sum(p.cdp_days for p in stats),
        sum(p.design_days for p in stats),
    ])
    _write_table(
        ws, f"PROJETS - {month} - Répartition des Ressources",
        ["Projet", "Total (j)", "Front (j)", "Back (j)", "CdP (j)", "Design (j)"],
        rows,
    )
    for j in range(1, 7):
        ws.cell(row=HEADER_ROW + len(rows), column=j).font = Font(bold=True)

    _save(wb, output)
    logger.info(f"Projects exported: {month}, {len(stats)} projects")
