"""Analysis configuration and sheet layout."""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .rules import DEFAULT_EXPERTISE_CELLS, DEFAULT_TEAMS, RULES, ExpertiseCell, TeamFilter
from .status import IGNORE_TOKENS


@dataclass(frozen=True)
class GridSchema:
    """Fixed column layout of a month tab (0-indexed)."""
    name_col: int = 1
    expertise_col: int = 2
    profile_col: int = 3
    category_col: int = 4
    first_slot_col: int = 5
    date_row: int = 2
    first_data_row: int = 3

    def to_dict(self) -> Dict:
        return {
            "name_col": self.name_col,
            "expertise_col": self.expertise_col,
            "profile_col": self.profile_col,
            "category_col": self.category_col,
            "first_slot_col": self.first_slot_col,
            "date_row": self.date_row,
            "first_data_row": self.first_data_row,
        }


DEFAULT_SCHEMA = GridSchema()


@dataclass
class AnalysisConfig:
    """Configuration passed through the metrics pipeline."""

    # Sheet layout
    schema: GridSchema = field(default_factory=GridSchema)
    in_scope_category: str = RULES.in_scope_category
    ignore_tokens: Tuple[str, ...] = IGNORE_TOKENS
    max_scan_iterations: int = RULES.max_scan_iterations

    # Groups
    teams: Tuple[TeamFilter, ...] = DEFAULT_TEAMS
    expertise_cells: Tuple[ExpertiseCell, ...] = DEFAULT_EXPERTISE_CELLS

    # Calendar policy
    exclude_holidays_from_capacity: bool = False  # Working days = Mon-Fri count
    skip_holidays_in_daily: bool = True  # Daily series skips public holidays

    # Alerts
    critical_threshold: float = RULES.critical_threshold
    warning_threshold: float = RULES.warning_threshold
    trend_warning_threshold: float = RULES.trend_warning_threshold

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "schema": self.schema.to_dict(),
            "in_scope_category": self.in_scope_category,
            "ignore_tokens": list(self.ignore_tokens),
            "max_scan_iterations": self.max_scan_iterations,
            "teams": [
                {"key": t.key, "name": t.name, "profile": t.profile} for t in self.teams
            ],
            "expertise_cells": [
                {"key": c.key, "name": c.name, "profile": c.profile, "expertise": c.expertise}
                for c in self.expertise_cells
            ],
            "exclude_holidays_from_capacity": self.exclude_holidays_from_capacity,
            "skip_holidays_in_daily": self.skip_holidays_in_daily,
            "critical_threshold": self.critical_threshold,
            "warning_threshold": self.warning_threshold,
            "trend_warning_threshold": self.trend_warning_threshold,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "AnalysisConfig":
        """Create from dictionary."""
        cfg = cls()
        for key, value in d.items():
            if not hasattr(cfg, key):
                continue
            if key == "schema":
                value = GridSchema(**value)
            elif key == "teams":
                value = tuple(TeamFilter(**t) for t in value)
            elif key == "expertise_cells":
                value = tuple(ExpertiseCell(**c) for c in value)
            elif key == "ignore_tokens":
                value = tuple(value)
            setattr(cfg, key, value)
        return cfg
