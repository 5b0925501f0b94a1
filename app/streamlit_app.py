"""
TACE — Streamlit Web UI
=======================
Activity rates per team and expertise from the monthly staffing workbook.
"""
import sys
import os
import streamlit as st

# Add src and project root to python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from app.state.session import SessionStateManager
from app.components.styling import apply_styling
from app.views.inputs import render_inputs, render_month_selector
from app.views.dashboard import render_dashboard
from app.views.teams import render_teams, render_expertise
from app.views.daily import render_daily
from app.views.projects import render_projects
from app.views.export import render_downloads

from tace.engine.pipeline import process_months
from tace.errors import TaceError


def main():
    # 1. Init
    SessionStateManager.init_state()
    state = SessionStateManager()
    apply_styling()

    st.title("📊 TACE — Taux d'activité des équipes")

    # 2. Sidebar (Inputs)
    render_inputs(state)

    if state.load_error:
        st.error(f"❌ {state.load_error}")
        return

    if not state.grids:
        st.info("👋 Chargez le planning (.xlsx) pour calculer les taux d'activité.")
        return

    # 3. Processing
    _handle_processing(state)
    if not state.report:
        return
    render_month_selector(state)

    # 4. Main Tabs
    tabs = st.tabs([
        "📈 Tableau de bord",
        "👥 Taux par équipe",
        "🎯 Taux par expertise",
        "📉 Visualisation TACE",
        "📁 Projets",
        "📥 Téléchargements",
    ])
    with tabs[0]:
        render_dashboard(state)
    with tabs[1]:
        render_teams(state)
    with tabs[2]:
        render_expertise(state)
    with tabs[3]:
        render_daily(state)
    with tabs[4]:
        render_projects(state)
    with tabs[5]:
        render_downloads(state)


def _handle_processing(state: SessionStateManager):
    """Compute the report; unchanged months come from the session cache."""
    try:
        with st.spinner("⏳ Calcul des indicateurs..."):
            state.report = process_months(
                state.grids, state.analysis_config(), cache=state.month_cache
            )
    except TaceError as e:
        state.report = None
        st.error(f"❌ {e}")


if __name__ == "__main__":
    main()
