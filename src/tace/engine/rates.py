"""
Activity Rate Formula
=====================
Single rate formula shared by team, expertise and daily metrics:

    rate = (capacity - absences - non_affected [- prevision]) / (capacity - absences) x 100

``prevision`` is subtracted under the REAL policy only. The rate is 0 when
``capacity - absences <= 0`` and is rounded half-up to 2 decimals.
"""
import math
from dataclasses import dataclass
from enum import Enum
from statistics import mean
from typing import Dict, Optional, Sequence, Tuple

from ..models.metrics import (
    DailyMetrics,
    ExpertiseMetrics,
    MonthlyTotals,
    SpecificTeamRates,
    StatusCounts,
    TeamMetrics,
)
from ..models.rules import TOTAL_NAME


class RatePolicy(str, Enum):
    REAL = "real"  # Taux réel: prevision counts against activity
    ESTIMATED = "estimated"  # Taux estimé: prevision counts as activity


def round_rate(value: float) -> float:
    """Round half-up to 2 decimals."""
    return math.floor(value * 100 + 0.5) / 100


def activity_rate(
    capacity: float,
    absences: float,
    non_affected: float,
    prevision: float = 0.0,
    policy: RatePolicy = RatePolicy.REAL,
) -> float:
    """Activity rate in percent."""
    available = capacity - absences
    if available <= 0:
        return 0.0
    produced = available - non_affected
    if policy == RatePolicy.REAL:
        produced -= prevision
    return round_rate(produced / available * 100)


# =============================================================================
# Daily (per half-day) rates
# =============================================================================

@dataclass(frozen=True)
class DailyRateSpec:
    """Capacity = sum of headcounts; counters = sum over cells (global if none)."""
    headcount_keys: Tuple[str, ...]
    cell_keys: Tuple[str, ...] = ()


DAILY_RATES: Dict[str, DailyRateSpec] = {
    "total": DailyRateSpec(("total",)),
    "front": DailyRateSpec(("front",), ("front_ecommerce", "front_sur_mesure")),
    "back": DailyRateSpec(("back",), ("back_ecommerce", "back_sur_mesure")),
    "ecommerce": DailyRateSpec(
        ("front_ecommerce", "back_ecommerce"), ("front_ecommerce", "back_ecommerce")
    ),
    "sur_mesure": DailyRateSpec(
        ("front_sur_mesure", "back_sur_mesure"), ("front_sur_mesure", "back_sur_mesure")
    ),
    "ecommerce_front": DailyRateSpec(("front_ecommerce",), ("front_ecommerce",)),
    "ecommerce_back": DailyRateSpec(("back_ecommerce",), ("back_ecommerce",)),
    "sur_mesure_front": DailyRateSpec(("front_sur_mesure",), ("front_sur_mesure",)),
    "sur_mesure_back": DailyRateSpec(("back_sur_mesure",), ("back_sur_mesure",)),
}

DAILY_RATE_LABELS = {
    "total": "Total CDS",
    "front": "Front",
    "back": "Back",
    "ecommerce": "E-commerce",
    "sur_mesure": "Sur mesure",
    "ecommerce_front": "E-commerce Front",
    "ecommerce_back": "E-commerce Back",
    "sur_mesure_front": "Sur mesure Front",
    "sur_mesure_back": "Sur mesure Back",
}


def daily_rate(metric: DailyMetrics, name: str, policy: RatePolicy = RatePolicy.REAL) -> float:
    """Rate ``name`` of DAILY_RATES for one half-day slot."""
    spec = DAILY_RATES[name]
    capacity = sum(metric.headcount.get(k, 0) for k in spec.headcount_keys)
    if spec.cell_keys:
        counts = StatusCounts()
        for key in spec.cell_keys:
            counts = counts + metric.cell_counts.get(key, StatusCounts())
    else:
        counts = metric.counts
    return activity_rate(capacity, counts.absences, counts.non_affected, counts.prevision, policy)


def total_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "total")


def front_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "front")


def back_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "back")


def ecommerce_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "ecommerce")


def sur_mesure_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "sur_mesure")


def ecommerce_front_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "ecommerce_front")


def ecommerce_back_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "ecommerce_back")


def sur_mesure_front_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "sur_mesure_front")


def sur_mesure_back_activity_rate(metric: DailyMetrics) -> float:
    return daily_rate(metric, "sur_mesure_back")


def mean_rate(rates: Sequence[float]) -> float:
    return round_rate(mean(rates)) if rates else 0.0


def monthly_rate_summary(daily: Sequence[DailyMetrics]) -> Dict[str, float]:
    """Mean half-day rate of the month per team and per expertise."""
    return {
        name: mean_rate([daily_rate(m, name) for m in daily])
        for name in ("front", "back", "ecommerce", "sur_mesure")
    }


# =============================================================================
# Monthly rollups
# =============================================================================

def find_team(team_metrics: Sequence[TeamMetrics], team_name: str) -> Optional[TeamMetrics]:
    for tm in team_metrics:
        if tm.team_name == team_name:
            return tm
    return None


def monthly_totals(team_metrics: Sequence[TeamMetrics]) -> Optional[MonthlyTotals]:
    """Global rates of the month; None when Total CDS has no members."""
    total = find_team(team_metrics, TOTAL_NAME)
    if total is None or not total.has_members:
        return None
    return MonthlyTotals(real_rate=total.real_rate, estimated_rate=total.estimated_rate)


def rate_breakdown(team_metrics: Sequence[TeamMetrics]) -> Dict[str, MonthlyTotals]:
    """Rates per team, omitting teams without members."""
    return {
        tm.team_name: MonthlyTotals(real_rate=tm.real_rate, estimated_rate=tm.estimated_rate)
        for tm in team_metrics
        if tm.has_members
    }


def specific_team_rates(expertise_metrics: Sequence[ExpertiseMetrics]) -> SpecificTeamRates:
    """Real rates of the four expertise cells."""
    by_key = {em.key: em.real_rate for em in expertise_metrics}
    return SpecificTeamRates(
        front_ecommerce_rate=by_key.get("front_ecommerce", 0.0),
        back_ecommerce_rate=by_key.get("back_ecommerce", 0.0),
        front_sur_mesure_rate=by_key.get("front_sur_mesure", 0.0),
        back_sur_mesure_rate=by_key.get("back_sur_mesure", 0.0),
    )
