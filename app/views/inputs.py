"""
Input View (Sidebar)
====================
Handles workbook loading, month selection and configuration.
"""
import io
from pathlib import Path

import streamlit as st

from app.components.sidebar import render_logo, render_file_upload, render_settings
from app.state.session import SessionStateManager
from tace.errors import TaceError
from tace.io.sheet_loader import load_csv_grid, load_workbook_grids


def _load_upload(uploaded) -> dict:
    """Grids from an uploaded .xlsx (one per tab) or .csv (named after the file)."""
    data = uploaded.getvalue()
    if uploaded.name.lower().endswith(".csv"):
        return {Path(uploaded.name).stem: load_csv_grid(io.BytesIO(data))}
    return load_workbook_grids(io.BytesIO(data))


def render_inputs(state: SessionStateManager):
    """Render the sidebar inputs and update state."""
    with st.sidebar:
        render_logo()

        st.header("1. Planning")
        uploaded_file = render_file_upload()

        if uploaded_file is not None and uploaded_file.name != st.session_state.get("source_name"):
            try:
                state.grids = _load_upload(uploaded_file)
                state.load_error = None
            except TaceError as e:
                state.grids = {}
                state.load_error = str(e)
            st.session_state.source_name = uploaded_file.name
            state.report = None

        if state.grids:
            st.caption(f"📄 {st.session_state.get('source_name')} ({len(state.grids)} onglets)")
            if st.button("🗑️ Réinitialiser", width="stretch"):
                state.clear_results()
                st.rerun()

        st.header("2. Configuration")
        render_settings()


def render_month_selector(state: SessionStateManager):
    """Month shown by the per-month tabs (defaults to the latest)."""
    labels = state.report.month_labels if state.report else []
    if not labels:
        return
    if st.session_state.get("selected_month") not in labels:
        st.session_state.pop("selected_month", None)
    st.sidebar.selectbox(
        "Mois affiché", labels, index=len(labels) - 1, key="selected_month"
    )
