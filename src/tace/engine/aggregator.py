"""
Metrics Aggregator
==================
Monthly team, expertise and project metrics from person records. Records
outside the in-scope category ("CDS") are dropped before counting.

Every status cell of a member is one half-day: it adds 0.5 to the
counter of its status.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.config import DEFAULT_SCHEMA, GridSchema
from ..models.metrics import ExpertiseMetrics, ProjectStatistics, StatusCounts, TeamMetrics
from ..models.person import IN_SCOPE_CATEGORY, PersonRecord
from ..models.rules import (
    DEFAULT_EXPERTISE_CELLS,
    DEFAULT_TEAMS,
    PROJECT_BUCKETS,
    TOTAL_NAME,
    ExpertiseCell,
    TeamFilter,
)
from ..models.status import IGNORE_TOKENS, STATUS_RULES, classify_cell
from ..utils.logging_setup import get_logger, log_function_call
from .grid import RawGrid, parse_rows
from .rates import RatePolicy, activity_rate

logger = get_logger(__name__)

HALF_DAY = 0.5


def count_statuses(
    members: Iterable[PersonRecord],
    ignore_tokens: Sequence[str] = IGNORE_TOKENS,
) -> StatusCounts:
    """Sum of every member's status cells, in days."""
    counts = StatusCounts()
    for person in members:
        for value in person.cells:
            counts.add(classify_cell(value, STATUS_RULES, ignore_tokens).kind, HALF_DAY)
    return counts


def _names(members: Sequence[PersonRecord]) -> List[str]:
    return [p.name for p in members if p.name]


def build_team_metrics(
    team_name: str,
    members: Sequence[PersonRecord],
    working_days: float,
    ignore_tokens: Sequence[str] = IGNORE_TOKENS,
) -> TeamMetrics:
    """Counters and both rates for one group of members."""
    counts = count_statuses(members, ignore_tokens)
    capacity = working_days * len(members)
    return TeamMetrics(
        team_name=team_name,
        collaborator_count=len(members),
        collaborator_names=_names(members),
        theoretical_capacity=capacity,
        absence_days=counts.absences,
        interne_days=counts.interne,
        non_affected_days=counts.non_affected,
        prevision_days=counts.prevision,
        real_rate=activity_rate(
            capacity, counts.absences, counts.non_affected, counts.prevision, RatePolicy.REAL
        ),
        estimated_rate=activity_rate(
            capacity, counts.absences, counts.non_affected, counts.prevision, RatePolicy.ESTIMATED
        ),
    )


def in_scope(rows: Iterable[PersonRecord], category: str = IN_SCOPE_CATEGORY) -> List[PersonRecord]:
    return [p for p in rows if p.category == category]


@log_function_call
def compute_team_metrics(
    rows: Sequence[PersonRecord],
    working_days: float,
    teams: Sequence[TeamFilter] = DEFAULT_TEAMS,
    ignore_tokens: Sequence[str] = IGNORE_TOKENS,
    in_scope_category: str = IN_SCOPE_CATEGORY,
) -> List[TeamMetrics]:
    """"Total CDS" (every in-scope row) first, then one row per team filter."""
    rows = in_scope(rows, in_scope_category)
    results = [build_team_metrics(TOTAL_NAME, rows, working_days, ignore_tokens)]
    for team in teams:
        members = [p for p in rows if p.matches(profile=team.profile)]
        results.append(build_team_metrics(team.name, members, working_days, ignore_tokens))

    for tm in results:
        logger.debug(
            f"{tm.team_name}: n={tm.collaborator_count} cap={tm.theoretical_capacity} "
            f"abs={tm.absence_days} na={tm.non_affected_days} prev={tm.prevision_days} "
            f"real={tm.real_rate} est={tm.estimated_rate}"
        )
    return results


@log_function_call
def compute_expertise_metrics(
    rows: Sequence[PersonRecord],
    working_days: Optional[float] = None,
    cells: Sequence[ExpertiseCell] = DEFAULT_EXPERTISE_CELLS,
    ignore_tokens: Sequence[str] = IGNORE_TOKENS,
    in_scope_category: str = IN_SCOPE_CATEGORY,
) -> List[ExpertiseMetrics]:
    """
    One record per (profile, expertise) cell.

    Without ``working_days`` only the counters are filled; capacity and
    rates stay 0.
    """
    rows = in_scope(rows, in_scope_category)
    results = []
    for cell in cells:
        members = [p for p in rows if p.matches(cell.profile, cell.expertise)]
        counts = count_statuses(members, ignore_tokens)
        capacity = (working_days or 0) * len(members)
        results.append(ExpertiseMetrics(
            expertise_name=cell.name,
            key=cell.key,
            profile=cell.profile,
            expertise=cell.expertise,
            collaborator_count=len(members),
            collaborator_names=_names(members),
            theoretical_capacity=capacity,
            absence_days=counts.absences,
            non_affected_days=counts.non_affected,
            prevision_days=counts.prevision,
            real_rate=activity_rate(
                capacity, counts.absences, counts.non_affected, counts.prevision, RatePolicy.REAL
            ),
            estimated_rate=activity_rate(
                capacity, counts.absences, counts.non_affected, counts.prevision,
                RatePolicy.ESTIMATED,
            ),
        ))
    return results


@log_function_call
def compute_project_statistics(
    grid: RawGrid,
    schema: GridSchema = DEFAULT_SCHEMA,
    in_scope_category: str = IN_SCOPE_CATEGORY,
    ignore_tokens: Sequence[str] = IGNORE_TOKENS,
    buckets: Dict[str, str] = PROJECT_BUCKETS,
) -> List[ProjectStatistics]:
    """
    Days per project label, split by the member's profile.

    Sorted by total days, descending; ties keep first-seen order.
    """
    stats: Dict[str, ProjectStatistics] = {}
    for person in parse_rows(grid, schema, in_scope_category):
        bucket = buckets.get(person.profile)
        for value in person.cells:
            status = classify_cell(value, STATUS_RULES, ignore_tokens)
            if not status.is_project:
                continue
            project = stats.setdefault(status.label, ProjectStatistics(project_name=status.label))
            project.total_days += HALF_DAY
            if bucket:
                setattr(project, bucket, getattr(project, bucket) + HALF_DAY)

    ordered = sorted(stats.values(), key=lambda p: -p.total_days)
    logger.debug(f"{len(ordered)} projects found")
    return ordered
