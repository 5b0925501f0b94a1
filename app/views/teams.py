"""
Team & Expertise View
=====================
Monthly metrics per team and per expertise cell.
"""
import streamlit as st

from app.components.styling import style_rate_rows
from app.state.session import SessionStateManager
from tace.ui.tables import expertise_table, team_table


def _result_or_info(state: SessionStateManager):
    result = state.selected_result()
    if result is None:
        st.info("👋 Chargez un planning pour voir les résultats.")
    return result


def render_teams(state: SessionStateManager):
    result = _result_or_info(state)
    if result is None:
        return

    st.subheader(f"👥 Taux par équipe — {result.month}")
    st.caption(f"{result.working_days} jours ouvrés")
    in_days = st.toggle("Afficher en jours", value=False, key="teams_in_days")
    metrics = result.team_metrics_in_days() if in_days else result.team_metrics
    df = team_table(metrics)
    st.dataframe(style_rate_rows(df), width="stretch", hide_index=True,
                 column_order=["Indicateur", "Valeur"])


def render_expertise(state: SessionStateManager):
    result = _result_or_info(state)
    if result is None:
        return

    st.subheader(f"🎯 Taux par expertise — {result.month}")
    in_days = st.toggle("Afficher en jours", value=False, key="expertise_in_days")
    metrics = result.expertise_metrics_in_days() if in_days else result.expertise_metrics
    df = expertise_table(metrics)
    st.dataframe(style_rate_rows(df), width="stretch", hide_index=True,
                 column_order=["Indicateur", "Valeur"])
