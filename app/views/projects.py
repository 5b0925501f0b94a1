"""
Projects View
=============
Days spent per project and profile for the selected month.
"""
import streamlit as st

from app.state.session import SessionStateManager
from tace.ui.charts import project_distribution_chart
from tace.ui.tables import project_table


def render_projects(state: SessionStateManager):
    result = state.selected_result()
    if result is None:
        st.info("👋 Chargez un planning pour voir les résultats.")
        return

    st.subheader(f"📁 Projets — {result.month}")
    if not result.project_stats:
        st.info("Aucun projet planifié ce mois-ci.")
        return

    col1, col2 = st.columns(2)
    col1.metric("Projets", len(result.project_stats))
    col2.metric("Jours planifiés", f"{sum(p.total_days for p in result.project_stats):.1f}")

    st.plotly_chart(project_distribution_chart(result.project_stats), width="stretch")
    st.dataframe(project_table(result.project_stats), width="stretch", hide_index=True)
