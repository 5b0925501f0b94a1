"""
Cross-Month Consolidation
=========================
Day-averaged series and month-over-month summaries spanning several
months. Ordering always relies on the zero-padded "YYYY-MM-DD" key, never on
display labels.
"""
from collections import OrderedDict
from dataclasses import replace
from statistics import mean
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..models.metrics import ConsolidatedDailyMetric, DailyMetrics, DailyRates, MonthlySummary
from ..utils.logging_setup import get_logger
from .months import month_sort_key
from .rates import DAILY_RATES, daily_rate, mean_rate, round_rate

logger = get_logger(__name__)

PerMonthSeries = Union[Mapping[str, Sequence[DailyMetrics]], Iterable[Sequence[DailyMetrics]]]


def flatten_series(per_month_series: PerMonthSeries) -> List[DailyMetrics]:
    if isinstance(per_month_series, Mapping):
        per_month_series = per_month_series.values()
    return [m for series in per_month_series for m in series]


def group_by_day(metrics: Iterable[DailyMetrics]) -> "OrderedDict[str, List[DailyMetrics]]":
    """Slots grouped under their calendar-day key, keys ascending."""
    groups: Dict[str, List[DailyMetrics]] = {}
    for metric in metrics:
        groups.setdefault(metric.sort_key, []).append(metric)
    return OrderedDict(sorted(groups.items()))


def consolidate_daily_metrics(per_month_series: PerMonthSeries) -> List[ConsolidatedDailyMetric]:
    """One record per calendar day, every numeric field averaged over its slots."""
    consolidated = []
    for key, slots in group_by_day(flatten_series(per_month_series)).items():
        flats = [m.to_flat_dict() for m in slots]
        fields = list(flats[0])
        values = {
            name: mean(f[name] for f in flats if name in f)
            for name in fields
        }
        consolidated.append(ConsolidatedDailyMetric(
            date_label=slots[0].day_label,
            sort_key=key,
            slot_count=len(slots),
            values=values,
        ))
    logger.debug(f"Consolidated {len(consolidated)} days")
    return consolidated


def aggregate_daily_metrics(
    series: Iterable[DailyMetrics],
    rate_names: Sequence[str] = tuple(DAILY_RATES),
) -> List[DailyRates]:
    """Mean of each derived half-day rate per calendar day, chronological."""
    rows = []
    for key, slots in group_by_day(series).items():
        rows.append(DailyRates(
            date_label=slots[0].day_label,
            sort_key=key,
            rates={name: mean_rate([daily_rate(m, name) for m in slots]) for name in rate_names},
        ))
    return rows


def _trend(current: MonthlySummary, previous: MonthlySummary) -> Dict[str, float]:
    now = current.rate_values()
    before = previous.rate_values()
    return {key: round_rate(now[key] - before[key]) for key in now if key in before}


def merge_monthly_summaries(summaries: Iterable[MonthlySummary]) -> List[MonthlySummary]:
    """
    Chronologically ordered summaries with month-over-month deltas.

    Deltas are in percentage points; the first month has no trend.
    """
    ordered = sorted(summaries, key=lambda s: month_sort_key(s.month))
    merged: List[MonthlySummary] = []
    previous: Optional[MonthlySummary] = None
    for summary in ordered:
        trends = _trend(summary, previous) if previous is not None else None
        merged.append(replace(summary, trends=trends))
        previous = summary
    return merged
