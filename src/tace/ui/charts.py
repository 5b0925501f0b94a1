"""Plotly figures for the dashboard."""
from typing import Sequence

import plotly.express as px
import plotly.graph_objects as go

from ..models.metrics import DailyRates, MonthlySummary, ProjectStatistics
from ..models.rules import RULES
from .tables import daily_rates_frame, project_table

MARGINS = dict(l=20, r=20, t=40, b=20)


def monthly_rates_chart(summaries: Sequence[MonthlySummary]) -> go.Figure:
    """Real vs. estimated global rate per month, with alert thresholds."""
    months = [s.month for s in summaries]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=months, y=[s.real_rate for s in summaries],
        mode="lines+markers", name="Taux réel",
        line=dict(color=RULES.series_colors["real"]),
    ))
    fig.add_trace(go.Scatter(
        x=months, y=[s.estimated_rate for s in summaries],
        mode="lines+markers", name="Taux estimé",
        line=dict(color=RULES.series_colors["estimated"]),
    ))
    fig.add_hline(y=RULES.warning_threshold, line_dash="dot", line_color="orange")
    fig.add_hline(y=RULES.critical_threshold, line_dash="dot", line_color="red")
    fig.update_layout(
        margin=MARGINS, height=350, yaxis_title="%", title="Taux d'activité mensuel"
    )
    return fig


def daily_rates_chart(daily_rates: Sequence[DailyRates], series: Sequence[str] = ()) -> go.Figure:
    """Day-averaged rates over every loaded month."""
    df = daily_rates_frame(daily_rates)
    if series:
        df = df[df["Série"].isin(series)]
    fig = px.line(df, x="Date", y="Taux", color="Série", markers=True)
    fig.update_layout(margin=MARGINS, height=400, yaxis_title="%")
    return fig


def project_distribution_chart(stats: Sequence[ProjectStatistics], top: int = 15) -> go.Figure:
    """Stacked days per profile for the largest projects."""
    df = project_table(stats).head(top)
    long = df.melt(
        id_vars=["Projet"],
        value_vars=["Front (j)", "Back (j)", "CdP (j)", "Design (j)"],
        var_name="Profil",
        value_name="Jours",
    )
    fig = px.bar(long, x="Projet", y="Jours", color="Profil", barmode="stack")
    fig.update_layout(margin=MARGINS, height=400)
    return fig
