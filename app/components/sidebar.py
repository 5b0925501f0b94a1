"""
Sidebar Components
==================
Reusable widgets for the sidebar.
"""
import streamlit as st
from typing import Optional, Any


def render_logo():
    """Render the app logo/header."""
    st.sidebar.markdown("### 📊 TACE — Taux d'activité")


def render_file_upload() -> Optional[Any]:
    """Render workbook uploader."""
    return st.sidebar.file_uploader(
        "Charger le planning", type=["xlsx", "csv"], key="workbook_uploader"
    )


def render_settings():
    """Alert thresholds and capacity policy (bound to session keys)."""
    with st.sidebar.expander("⚙️ Paramètres", expanded=False):
        st.number_input(
            "Seuil critique (%)", min_value=0.0, max_value=100.0, step=1.0,
            key="config_critical",
        )
        st.number_input(
            "Seuil d'avertissement (%)", min_value=0.0, max_value=100.0, step=1.0,
            key="config_warning",
        )
        st.checkbox(
            "Exclure les jours fériés de la capacité",
            key="config_exclude_holidays",
        )
