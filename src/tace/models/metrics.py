"""
Metric Value Objects
====================
Results of the metrics aggregator. All counters are in half-day units of
0.5 day unless stated otherwise; rates are percentages rounded to 2 decimals.
"""
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from typing import Dict, List, Optional

from .status import StatusKind

COUNTER_FIELDS = ("absences", "interne", "non_affected", "prevision")


@dataclass
class StatusCounts:
    """Counters for the four reserved statuses."""
    absences: float = 0.0
    interne: float = 0.0
    non_affected: float = 0.0
    prevision: float = 0.0

    def add(self, kind: StatusKind, amount: float = 1.0) -> None:
        """Increment the counter matching ``kind`` (no-op for projects/empty)."""
        counter = kind.counter
        if counter:
            setattr(self, counter, getattr(self, counter) + amount)

    def __add__(self, other: "StatusCounts") -> "StatusCounts":
        return StatusCounts(
            absences=self.absences + other.absences,
            interne=self.interne + other.interne,
            non_affected=self.non_affected + other.non_affected,
            prevision=self.prevision + other.prevision,
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class TeamMetrics:
    """Capacity and activity rates of one team over a month."""
    team_name: str
    collaborator_count: int = 0
    collaborator_names: List[str] = field(default_factory=list)
    theoretical_capacity: float = 0.0
    absence_days: float = 0.0
    interne_days: float = 0.0
    non_affected_days: float = 0.0
    prevision_days: float = 0.0
    real_rate: float = 0.0
    estimated_rate: float = 0.0

    @property
    def real_capacity(self) -> float:
        """Capacity once absences are removed."""
        return self.theoretical_capacity - self.absence_days

    @property
    def has_members(self) -> bool:
        return self.collaborator_count > 0

    def to_full_days(self) -> "TeamMetrics":
        """Same metrics with every status counter halved."""
        return replace(
            self,
            collaborator_names=list(self.collaborator_names),
            absence_days=self.absence_days / 2,
            interne_days=self.interne_days / 2,
            non_affected_days=self.non_affected_days / 2,
            prevision_days=self.prevision_days / 2,
        )

    def to_dict(self) -> Dict:
        d = asdict(self)
        d["real_capacity"] = self.real_capacity
        return d


@dataclass
class ExpertiseMetrics:
    """Capacity and activity rates of one (profile, expertise) cell."""
    expertise_name: str
    key: str = ""  # Expertise cell key, e.g. "front_ecommerce"
    profile: str = ""
    expertise: str = ""
    collaborator_count: int = 0
    collaborator_names: List[str] = field(default_factory=list)
    theoretical_capacity: float = 0.0
    absence_days: float = 0.0
    non_affected_days: float = 0.0
    prevision_days: float = 0.0
    real_rate: float = 0.0
    estimated_rate: float = 0.0

    @property
    def real_capacity(self) -> float:
        return self.theoretical_capacity - self.absence_days

    def to_full_days(self) -> "ExpertiseMetrics":
        return replace(
            self,
            collaborator_names=list(self.collaborator_names),
            absence_days=self.absence_days / 2,
            non_affected_days=self.non_affected_days / 2,
            prevision_days=self.prevision_days / 2,
        )

    def to_dict(self) -> Dict:
        d = asdict(self)
        d["real_capacity"] = self.real_capacity
        return d


@dataclass
class DailyMetrics:
    """One emitted half-day slot of a working day."""
    date_label: str  # "dd/mm/yyyy Matin" | "dd/mm/yyyy Après-midi"
    day: date
    half_day: str
    column: int
    is_working_day: bool = True
    cumulative_working_days: float = 0.0

    # Fixed over the month: total, teams and expertise cells
    headcount: Dict[str, int] = field(default_factory=dict)

    # This slot only / running sum from month start
    counts: StatusCounts = field(default_factory=StatusCounts)
    cumulative: StatusCounts = field(default_factory=StatusCounts)

    # Same, per expertise cell key
    cell_counts: Dict[str, StatusCounts] = field(default_factory=dict)
    cell_cumulative: Dict[str, StatusCounts] = field(default_factory=dict)

    @property
    def sort_key(self) -> str:
        """Zero-padded YYYY-MM-DD key of the calendar day."""
        return self.day.isoformat()

    @property
    def day_label(self) -> str:
        """Display label without the half-day suffix."""
        return self.date_label.rsplit(" ", 1)[0]

    def to_flat_dict(self) -> Dict[str, float]:
        """Every numeric field, flattened into one mapping."""
        flat: Dict[str, float] = {"cumulative_working_days": self.cumulative_working_days}
        for key, value in self.headcount.items():
            flat[f"headcount_{key}"] = value
        for name in COUNTER_FIELDS:
            flat[name] = getattr(self.counts, name)
            flat[f"cumulative_{name}"] = getattr(self.cumulative, name)
        for key, counts in self.cell_counts.items():
            cumulative = self.cell_cumulative.get(key, StatusCounts())
            for name in COUNTER_FIELDS:
                flat[f"{key}_{name}"] = getattr(counts, name)
                flat[f"{key}_cumulative_{name}"] = getattr(cumulative, name)
        return flat


@dataclass
class ProjectStatistics:
    """Days spent on a project, split by profile."""
    project_name: str
    total_days: float = 0.0
    front_days: float = 0.0
    back_days: float = 0.0
    cdp_days: float = 0.0
    design_days: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class ConsolidatedDailyMetric:
    """One calendar day: its half-day slots averaged field by field."""
    date_label: str  # "dd/mm/yyyy"
    sort_key: str  # "YYYY-MM-DD"
    slot_count: int
    values: Dict[str, float] = field(default_factory=dict)


@dataclass
class DailyRates:
    """Mean of each derived rate over the slots of one calendar day."""
    date_label: str
    sort_key: str
    rates: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyTotals:
    real_rate: float
    estimated_rate: float


@dataclass(frozen=True)
class SpecificTeamRates:
    front_ecommerce_rate: float = 0.0
    back_ecommerce_rate: float = 0.0
    front_sur_mesure_rate: float = 0.0
    back_sur_mesure_rate: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class MonthlySummary:
    """Merged per-month rates, with deltas against the previous month."""
    month: str
    totals: Optional[MonthlyTotals] = None
    specific_rates: SpecificTeamRates = field(default_factory=SpecificTeamRates)
    team_rates: Dict[str, float] = field(default_factory=dict)
    expertise_rates: Dict[str, float] = field(default_factory=dict)
    trends: Optional[Dict[str, float]] = None  # None for the first month

    @property
    def real_rate(self) -> Optional[float]:
        return self.totals.real_rate if self.totals else None

    @property
    def estimated_rate(self) -> Optional[float]:
        return self.totals.estimated_rate if self.totals else None

    def rate_values(self) -> Dict[str, float]:
        """Flat mapping of every rate carried by the summary."""
        values: Dict[str, float] = {}
        if self.totals:
            values["real_rate"] = self.totals.real_rate
            values["estimated_rate"] = self.totals.estimated_rate
        values.update(self.specific_rates.to_dict())
        for key, rate in self.team_rates.items():
            values[f"{key}_team_rate"] = rate
        for key, rate in self.expertise_rates.items():
            values[f"{key}_expertise_rate"] = rate
        return values

    def to_dict(self) -> Dict:
        return {
            "month": self.month,
            "real_rate": self.real_rate,
            "estimated_rate": self.estimated_rate,
            "specific_rates": self.specific_rates.to_dict(),
            "team_rates": dict(self.team_rates),
            "expertise_rates": dict(self.expertise_rates),
            "trends": dict(self.trends) if self.trends is not None else None,
        }
