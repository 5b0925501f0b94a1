"""
Daily (half-day) Metrics
========================
Per-slot status counts over the working days of a month, with running
totals carried by an explicit fold (``scan_daily``).

Each in-scope person adds one unit per slot to the counter of their cell
status; the cumulative working-day count grows by 0.5 per emitted slot.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..models.config import AnalysisConfig
from ..models.metrics import DailyMetrics, StatusCounts
from ..models.person import PersonRecord
from ..models.rules import AFTERNOON, MORNING, TOTAL_KEY, ExpertiseCell, TeamFilter
from ..models.status import STATUS_RULES, classify_cell
from ..utils.logging_setup import get_logger, log_function_call
from .grid import RawGrid, SlotDescriptor, parse_rows, scan_half_day_slots, slot_cell
from .months import parse_month_label
from .workdays import is_weekend, is_working_day

logger = get_logger(__name__)


@dataclass(frozen=True)
class SlotEvent:
    """Counts observed in one half-day column."""
    slot: SlotDescriptor
    half_day: str
    column: int
    counts: StatusCounts
    cell_counts: Dict[str, StatusCounts] = field(default_factory=dict)

    @property
    def date_label(self) -> str:
        return f"{self.slot.day:%d/%m/%Y} {self.half_day}"


@dataclass(frozen=True)
class ScanState:
    """Running sums carried from one slot to the next."""
    headcount: Dict[str, int] = field(default_factory=dict)
    working_days: float = 0.0
    cumulative: StatusCounts = field(default_factory=StatusCounts)
    cell_cumulative: Dict[str, StatusCounts] = field(default_factory=dict)


def headcounts(
    rows: Sequence[PersonRecord],
    teams: Sequence[TeamFilter],
    cells: Sequence[ExpertiseCell],
) -> Dict[str, int]:
    """Fixed member counts: total, per team and per expertise cell."""
    counts = {TOTAL_KEY: len(rows)}
    for team in teams:
        counts[team.key] = sum(1 for p in rows if p.matches(profile=team.profile))
    for cell in cells:
        counts[cell.key] = sum(1 for p in rows if p.matches(cell.profile, cell.expertise))
    return counts


def initial_state(headcount: Dict[str, int], cells: Sequence[ExpertiseCell]) -> ScanState:
    return ScanState(
        headcount=dict(headcount),
        cell_cumulative={cell.key: StatusCounts() for cell in cells},
    )


def step(state: ScanState, event: SlotEvent) -> Tuple[ScanState, DailyMetrics]:
    """Advance the running sums by one slot and emit its record."""
    cell_cumulative = {
        key: total + event.cell_counts.get(key, StatusCounts())
        for key, total in state.cell_cumulative.items()
    }
    new_state = ScanState(
        headcount=state.headcount,
        working_days=state.working_days + 0.5,
        cumulative=state.cumulative + event.counts,
        cell_cumulative=cell_cumulative,
    )
    metric = DailyMetrics(
        date_label=event.date_label,
        day=event.slot.day,
        half_day=event.half_day,
        column=event.column,
        is_working_day=True,
        cumulative_working_days=new_state.working_days,
        headcount=dict(state.headcount),
        counts=event.counts,
        cumulative=new_state.cumulative,
        cell_counts=dict(event.cell_counts),
        cell_cumulative=cell_cumulative,
    )
    return new_state, metric


def scan_daily(
    initial: ScanState, slot_events: Iterable[SlotEvent]
) -> List[Tuple[ScanState, DailyMetrics]]:
    """Fold slot events into (state after slot, record) pairs."""
    results = []
    state = initial
    for event in slot_events:
        state, metric = step(state, event)
        results.append((state, metric))
    return results


def count_column(
    rows: Sequence[PersonRecord],
    column: int,
    cells: Sequence[ExpertiseCell],
    config: AnalysisConfig,
) -> Tuple[StatusCounts, Dict[str, StatusCounts]]:
    """Global and per-cell counts of one sheet column."""
    counts = StatusCounts()
    cell_counts = {cell.key: StatusCounts() for cell in cells}
    for person in rows:
        kind = classify_cell(
            slot_cell(person, column, config.schema), STATUS_RULES, config.ignore_tokens
        ).kind
        counts.add(kind)
        for cell in cells:
            if person.matches(cell.profile, cell.expertise):
                cell_counts[cell.key].add(kind)
    return counts, cell_counts


def slot_events(
    rows: Sequence[PersonRecord],
    slots: Iterable[SlotDescriptor],
    config: AnalysisConfig,
) -> Iterator[SlotEvent]:
    """Morning then afternoon event for every slot."""
    for slot in slots:
        for half_day, column in ((MORNING, slot.morning_col), (AFTERNOON, slot.afternoon_col)):
            counts, cell_counts = count_column(rows, column, config.expertise_cells, config)
            yield SlotEvent(slot, half_day, column, counts, cell_counts)


def working_day_slots(
    grid: RawGrid,
    month_label: str,
    config: Optional[AnalysisConfig] = None,
) -> List[SlotDescriptor]:
    """Paired header slots of the month that fall on working days."""
    config = config or AnalysisConfig()
    parsed = parse_month_label(month_label)
    if parsed is None:
        logger.warning(f"Unparseable month label {month_label!r}: no daily slots")
        return []
    _, month = parsed

    slots = scan_half_day_slots(grid, month, config.schema, config.max_scan_iterations)
    if config.skip_holidays_in_daily:
        kept = [s for s in slots if is_working_day(s.day)]
    else:
        kept = [s for s in slots if not is_weekend(s.day)]
    logger.debug(f"{month_label}: {len(slots)} paired days, {len(kept)} working days")
    return sorted(kept, key=lambda s: s.day)


@log_function_call
def compute_daily_metrics(
    grid: RawGrid,
    month_label: str,
    config: Optional[AnalysisConfig] = None,
) -> List[DailyMetrics]:
    """
    Two records (Matin, Après-midi) per working day of the month, ascending.

    Weekend and holiday slots are not emitted at all, so the series has no
    entry for those calendar days.
    """
    config = config or AnalysisConfig()
    rows = parse_rows(grid, config.schema, config.in_scope_category)
    slots = working_day_slots(grid, month_label, config)

    start = initial_state(
        headcounts(rows, config.teams, config.expertise_cells), config.expertise_cells
    )
    return [metric for _, metric in scan_daily(start, slot_events(rows, slots, config))]
