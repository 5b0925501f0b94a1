"""
Daily View
==========
Half-day series of the selected month and day-averaged rates across months.
"""
import streamlit as st

from app.state.session import SessionStateManager
from tace.engine.rates import DAILY_RATE_LABELS
from tace.ui.charts import daily_rates_chart
from tace.ui.tables import daily_table


def render_daily(state: SessionStateManager):
    report = state.report
    if not report or not report.daily_rates:
        st.info("👋 Chargez un planning pour voir les résultats.")
        return

    st.subheader("📈 Évolution quotidienne des taux")
    labels = list(DAILY_RATE_LABELS.values())
    series = st.multiselect("Séries", labels, default=labels[:3], key="daily_series")
    st.plotly_chart(daily_rates_chart(report.daily_rates, series), width="stretch")

    result = state.selected_result()
    if result and result.daily_metrics:
        with st.expander(f"Détail par demi-journée — {result.month}"):
            st.dataframe(daily_table(result.daily_metrics), width="stretch")
