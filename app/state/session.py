"""
Session State Management
========================
Encapsulates all Streamlit session state interactions.
"""
from typing import Optional, Dict, TYPE_CHECKING
import streamlit as st

if TYPE_CHECKING:
    from tace.engine.cache import MonthCache
    from tace.engine.pipeline import DashboardReport, MonthResult
    from tace.models.config import AnalysisConfig


class SessionStateManager:
    """Manages type-safe access to session state."""

    @staticmethod
    def init_state():
        """Initialize default session state values."""
        defaults = {
            "grids": {},
            "source_name": None,
            "report": None,
            "load_error": None,
            "month_cache": None,
            # Config defaults
            "config_critical": 70.0,
            "config_warning": 85.0,
            "config_exclude_holidays": False,
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    @property
    def grids(self) -> Dict[str, list]:
        return st.session_state.get("grids", {})

    @grids.setter
    def grids(self, value: Dict[str, list]):
        st.session_state["grids"] = value

    @property
    def report(self) -> Optional['DashboardReport']:
        return st.session_state.get("report")

    @report.setter
    def report(self, value: 'DashboardReport'):
        st.session_state["report"] = value

    @property
    def load_error(self) -> Optional[str]:
        return st.session_state.get("load_error")

    @load_error.setter
    def load_error(self, value: Optional[str]):
        st.session_state["load_error"] = value

    @property
    def month_cache(self) -> 'MonthCache':
        """Per-session month cache, created on first use."""
        cache = st.session_state.get("month_cache")
        if cache is None:
            from tace.engine.cache import MonthCache
            cache = MonthCache()
            st.session_state["month_cache"] = cache
        return cache

    @property
    def selected_month(self) -> Optional[str]:
        return st.session_state.get("selected_month")

    def selected_result(self) -> Optional['MonthResult']:
        """Result of the selected month, or the latest one."""
        report = self.report
        if not report or not report.months:
            return None
        return report.get(self.selected_month) or report.months[-1]

    def analysis_config(self) -> 'AnalysisConfig':
        """AnalysisConfig built from the sidebar settings."""
        from tace.models.config import AnalysisConfig
        return AnalysisConfig(
            critical_threshold=float(st.session_state.get("config_critical", 70.0)),
            warning_threshold=float(st.session_state.get("config_warning", 85.0)),
            exclude_holidays_from_capacity=bool(
                st.session_state.get("config_exclude_holidays", False)
            ),
        )

    def clear_results(self):
        """Clear loaded grids and computed results."""
        st.session_state["grids"] = {}
        st.session_state["source_name"] = None
        st.session_state["report"] = None
        st.session_state["load_error"] = None
        st.session_state.pop("selected_month", None)
