"""
Export View
===========
Handles Excel downloads.
"""
import io

import streamlit as st

from app.state.session import SessionStateManager
from tace.io.excel_export import export_dashboard, export_projects

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def render_downloads(state: SessionStateManager):
    """Render the download section."""
    report = state.report
    if not report or not report.summaries:
        st.warning("Veuillez charger un planning valide avant d'exporter.")
        return

    st.subheader("📥 Téléchargements")
    col1, col2 = st.columns(2)

    with col1:
        xlsx_buffer = io.BytesIO()
        export_dashboard(report.summaries, xlsx_buffer)
        st.download_button(
            "📥 Tableau de bord (Excel)",
            xlsx_buffer.getvalue(),
            "tace_dashboard.xlsx",
            XLSX_MIME,
        )

    result = state.selected_result()
    with col2:
        if result and result.project_stats:
            proj_buffer = io.BytesIO()
            export_projects(result.project_stats, result.month, proj_buffer)
            st.download_button(
                f"📥 Projets {result.month} (Excel)",
                proj_buffer.getvalue(),
                f"tace_projets_{result.month.replace(' ', '_')}.xlsx",
                XLSX_MIME,
            )
