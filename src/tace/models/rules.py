"""
Business Rules and Constants
============================
Central source of truth for team filters, expertise cells, thresholds and
UI colors.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .person import CDP, DEV_BACK, DEV_FRONT, ECOMMERCE, GRAPHISTE, SUR_MESURE


@dataclass(frozen=True)
class TeamFilter:
    """A team row of the breakdown: CDS members with a given profile."""
    key: str
    name: str
    profile: str


@dataclass(frozen=True)
class ExpertiseCell:
    """A (profile, expertise) cross-product tracked separately."""
    key: str
    name: str
    profile: str
    expertise: str


TOTAL_KEY = "total"
TOTAL_NAME = "Total CDS"

DEFAULT_TEAMS: Tuple[TeamFilter, ...] = (
    TeamFilter("front", "Equipe Front", DEV_FRONT),
    TeamFilter("back", "Equipe Back", DEV_BACK),
    TeamFilter("cdp", "Equipe CdP", CDP),
    TeamFilter("design", "Equipe Design", GRAPHISTE),
)

DEFAULT_EXPERTISE_CELLS: Tuple[ExpertiseCell, ...] = (
    ExpertiseCell("front_ecommerce", "Front E-commerce", DEV_FRONT, ECOMMERCE),
    ExpertiseCell("front_sur_mesure", "Front Sur mesure", DEV_FRONT, SUR_MESURE),
    ExpertiseCell("back_ecommerce", "Back E-commerce", DEV_BACK, ECOMMERCE),
    ExpertiseCell("back_sur_mesure", "Back Sur mesure", DEV_BACK, SUR_MESURE),
)

# Profile -> ProjectStatistics bucket
PROJECT_BUCKETS: Dict[str, str] = {
    DEV_FRONT: "front_days",
    DEV_BACK: "back_days",
    CDP: "cdp_days",
    GRAPHISTE: "design_days",
}

MORNING = "Matin"
AFTERNOON = "Après-midi"


@dataclass
class RulesConfig:
    """Business rules constants."""

    # Grid
    in_scope_category: str = "CDS"
    min_grid_rows: int = 4
    max_scan_iterations: int = 100  # > 2 x 31 + 5 header columns

    # Calendar
    default_working_days: int = 22

    # Alerts (percent / percentage points)
    critical_threshold: float = 70.0
    warning_threshold: float = 85.0
    trend_warning_threshold: float = -5.0

    # UI
    rate_colors: Dict[str, str] = field(default_factory=lambda: {
        "good": "#D4EDDA",
        "average": "#FFF3CD",
        "low": "#F8D7DA",
    })
    series_colors: Dict[str, str] = field(default_factory=lambda: {
        "real": "#BD5CCA",
        "estimated": "#8BF8A4",
    })

RULES = RulesConfig()
