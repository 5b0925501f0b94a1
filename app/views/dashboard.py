"""
Dashboard View
==============
Cross-month KPIs, trends and alerts.
"""
import streamlit as st

from app.state.session import SessionStateManager
from tace.engine.alerts import AlertLevel
from tace.ui.charts import monthly_rates_chart
from tace.ui.tables import format_rate, summary_table

_ALERT_RENDERERS = {
    AlertLevel.CRITICAL: st.error,
    AlertLevel.WARNING: st.warning,
    AlertLevel.INFO: st.info,
}


def render_dashboard(state: SessionStateManager):
    """Render the cross-month dashboard."""
    report = state.report
    if not report or not report.summaries:
        st.info("👋 Chargez un planning pour voir les résultats.")
        return

    _render_hero_kpis(report)

    st.divider()
    col_chart, col_alerts = st.columns([2, 1])
    with col_chart:
        st.plotly_chart(monthly_rates_chart(report.summaries), width="stretch")
    with col_alerts:
        st.subheader("🔔 Alertes")
        for alert in report.alerts:
            _ALERT_RENDERERS[alert.level](f"**{alert.title}** — {alert.message}")

    st.subheader("Résumé mensuel")
    df = summary_table(report.summaries)
    st.dataframe(df, width="stretch", hide_index=True)

    if report.skipped:
        with st.expander(f"⚠️ {len(report.skipped)} mois ignoré(s)"):
            for month, reason in report.skipped.items():
                st.write(f"- **{month}** : {reason}")


def _render_hero_kpis(report):
    latest = report.summaries[-1]
    trend = (latest.trends or {}).get("real_rate")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric(
            f"Taux réel ({latest.month})", format_rate(latest.real_rate),
            delta=f"{trend:+.1f} pts" if trend is not None else None,
        )
    with col2:
        st.metric("Taux estimé", format_rate(latest.estimated_rate))
    with col3:
        st.metric("Mois analysés", len(report.summaries))
    with col4:
        critical = sum(1 for a in report.alerts if a.level == AlertLevel.CRITICAL)
        st.metric("Alertes critiques", critical,
                  delta="⚠️" if critical else None, delta_color="inverse")
