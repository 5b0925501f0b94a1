"""Tabular views (pandas DataFrames) of the computed metrics."""
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..models.metrics import (
    COUNTER_FIELDS,
    DailyMetrics,
    DailyRates,
    ExpertiseMetrics,
    MonthlySummary,
    ProjectStatistics,
    TeamMetrics,
)
from ..models.rules import RULES, TOTAL_NAME
from ..engine.rates import DAILY_RATE_LABELS, daily_rate

ROW_COLUMNS = ["Indicateur", "Valeur", "Type"]  # Type: title | rate | value

COUNTER_LABELS = {
    "absences": "Absence : congés/OUT",
    "interne": "Interne",
    "non_affected": "Non affecté",
    "prevision": "Prévision",
}


def rate_level(rate: Optional[float]) -> str:
    """good (>= warning threshold), average (>= critical threshold), low."""
    if rate is None:
        return ""
    if rate >= RULES.warning_threshold:
        return "good"
    if rate >= RULES.critical_threshold:
        return "average"
    return "low"


def format_rate(rate: Optional[float]) -> str:
    return "—" if rate is None else f"{rate:.1f} %"


def _row(label: str, value, kind: str = "value") -> Dict:
    return {"Indicateur": label, "Valeur": value, "Type": kind}


def team_table(team_metrics: Sequence[TeamMetrics]) -> pd.DataFrame:
    """Label/value rows, rates first within each team block."""
    rows: List[Dict] = []
    for tm in team_metrics:
        is_total = tm.team_name == TOTAL_NAME
        rows.append(_row(tm.team_name.upper(), "", "title"))
        if not tm.has_members:
            rows.append(_row("Collaborateurs", 0))
            continue
        rows.append(_row(
            "Taux d'activité réel (hors prévision)" if is_total else "Taux d'activité réel global",
            format_rate(tm.real_rate), "rate",
        ))
        rows.append(_row(
            "Taux d'activité estimé (prévision inclus)" if is_total else "Taux d'activité estimé global",
            format_rate(tm.estimated_rate), "rate",
        ))
        rows.append(_row("Collaborateurs", tm.collaborator_count))
        rows.append(_row("Capacité de production théorique", round(tm.theoretical_capacity, 1)))
        rows.append(_row("Jours Absence : congés/OUT", round(tm.absence_days, 1)))
        rows.append(_row("Jours interne", round(tm.interne_days, 1)))
        rows.append(_row("Jours Non Affecté", round(tm.non_affected_days, 1)))
        rows.append(_row("Jours Prévision", round(tm.prevision_days, 1)))
        rows.append(_row("Capacité de production réelle en jours", round(tm.real_capacity, 1)))
    return pd.DataFrame(rows, columns=ROW_COLUMNS)


def expertise_table(expertise_metrics: Sequence[ExpertiseMetrics]) -> pd.DataFrame:
    rows: List[Dict] = []
    for em in expertise_metrics:
        rows.append(_row(em.expertise_name.upper(), "", "title"))
        rows.append(_row("Taux d'activité réel", format_rate(em.real_rate), "rate"))
        rows.append(_row("Taux d'activité estimé", format_rate(em.estimated_rate), "rate"))
        rows.append(_row("Collaborateurs", em.collaborator_count))
        rows.append(_row("Jours à produire", round(em.theoretical_capacity, 1)))
        rows.append(_row("Jours Absence : congés/OUT", round(em.absence_days, 1)))
        rows.append(_row("Jours non Affecté", round(em.non_affected_days, 1)))
        rows.append(_row("Jours Prévision", round(em.prevision_days, 1)))
    return pd.DataFrame(rows, columns=ROW_COLUMNS)


def daily_table(daily: Sequence[DailyMetrics]) -> pd.DataFrame:
    """One column per half-day, indicators as rows."""
    data: Dict[str, Dict[str, object]] = {}
    for m in daily:
        col: Dict[str, object] = {
            "Jours ouvrés cumulés": m.cumulative_working_days,
            "Collaborateurs CDS": m.headcount.get("total", 0),
        }
        for name in COUNTER_FIELDS:
            col[f"Demi-jours {COUNTER_LABELS[name]}"] = getattr(m.counts, name)
            col[f"Cumul {COUNTER_LABELS[name]}"] = getattr(m.cumulative, name)
        for key, label in DAILY_RATE_LABELS.items():
            col[f"Taux réel {label}"] = daily_rate(m, key)
        data[m.date_label] = col
    return pd.DataFrame(data)


def project_table(stats: Sequence[ProjectStatistics]) -> pd.DataFrame:
    rows = [
        {
            "Projet": p.project_name,
            "Total (j)": p.total_days,
            "Front (j)": p.front_days,
            "Back (j)": p.back_days,
            "CdP (j)": p.cdp_days,
            "Design (j)": p.design_days,
        }
        for p in stats
    ]
    return pd.DataFrame(
        rows, columns=["Projet", "Total (j)", "Front (j)", "Back (j)", "CdP (j)", "Design (j)"]
    )


def summary_table(summaries: Sequence[MonthlySummary]) -> pd.DataFrame:
    """One row per month, rates as numbers (NaN when no data)."""
    rows = []
    for s in summaries:
        trend = (s.trends or {}).get("real_rate")
        rows.append({
            "Mois": s.month,
            "Taux réel": s.real_rate,
            "Taux estimé": s.estimated_rate,
            "Front": s.team_rates.get("front"),
            "Back": s.team_rates.get("back"),
            "E-commerce": s.expertise_rates.get("ecommerce"),
            "Sur mesure": s.expertise_rates.get("sur_mesure"),
            "Front E-commerce": s.specific_rates.front_ecommerce_rate,
            "Back E-commerce": s.specific_rates.back_ecommerce_rate,
            "Front Sur mesure": s.specific_rates.front_sur_mesure_rate,
            "Back Sur mesure": s.specific_rates.back_sur_mesure_rate,
            "Tendance (pts)": trend,
        })
    return pd.DataFrame(rows)


def daily_rates_frame(daily_rates: Sequence[DailyRates]) -> pd.DataFrame:
    """Long-form frame (Date, Série, Taux) for charting."""
    rows = []
    for day in daily_rates:
        for key, rate in day.rates.items():
            rows.append({
                "Date": pd.Timestamp(day.sort_key),
                "Série": DAILY_RATE_LABELS.get(key, key),
                "Taux": rate,
            })
    return pd.DataFrame(rows, columns=["Date", "Série", "Taux"])
