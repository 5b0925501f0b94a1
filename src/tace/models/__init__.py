# tace/models - Data models for the activity-rate dashboard
from .config import AnalysisConfig, GridSchema
from .metrics import (
    ConsolidatedDailyMetric,
    DailyMetrics,
    DailyRates,
    ExpertiseMetrics,
    MonthlySummary,
    MonthlyTotals,
    ProjectStatistics,
    SpecificTeamRates,
    StatusCounts,
    TeamMetrics,
)
from .person import PersonRecord
from .rules import RULES, ExpertiseCell, TeamFilter
from .status import STATUS_RULES, CellStatus, StatusKind, classify_cell

__all__ = [
    "PersonRecord",
    "StatusKind", "CellStatus", "STATUS_RULES", "classify_cell",
    "TeamMetrics", "ExpertiseMetrics", "DailyMetrics", "StatusCounts",
    "ProjectStatistics", "ConsolidatedDailyMetric", "DailyRates",
    "MonthlyTotals", "SpecificTeamRates", "MonthlySummary",
    "AnalysisConfig", "GridSchema", "RULES", "TeamFilter", "ExpertiseCell",
]
