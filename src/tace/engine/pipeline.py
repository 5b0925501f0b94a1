"""
Month Pipeline
==============
Validates and processes every month tab of a workbook, then consolidates
the valid months.

A month is skipped (and reported) when its grid has fewer than 4 rows or
when no working-day slot is found in its date header. Only when every
month is skipped does the pipeline fail, with NoValidMonthError.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..errors import InsufficientDataError, NoValidMonthError
from ..models.config import AnalysisConfig
from ..models.metrics import (
    ConsolidatedDailyMetric,
    DailyMetrics,
    DailyRates,
    ExpertiseMetrics,
    MonthlySummary,
    MonthlyTotals,
    ProjectStatistics,
    SpecificTeamRates,
    TeamMetrics,
)
from ..models.rules import RULES
from ..utils.logging_setup import PipelineLogger, get_logger
from .aggregator import compute_expertise_metrics, compute_project_statistics, compute_team_metrics
from .alerts import Alert, generate_alerts
from .cache import MonthCache, grid_hash
from .consolidate import (
    aggregate_daily_metrics,
    consolidate_daily_metrics,
    flatten_series,
    merge_monthly_summaries,
)
from .daily import compute_daily_metrics, working_day_slots
from .grid import RawGrid, parse_rows
from .months import filter_month_labels
from .rates import monthly_rate_summary, monthly_totals, specific_team_rates
from .workdays import working_days_in_month

logger = get_logger(__name__)

NO_WORKING_DAYS = "no working days detected"


@dataclass
class MonthResult:
    """Everything computed for one month tab."""
    month: str
    working_days: int
    team_metrics: List[TeamMetrics] = field(default_factory=list)
    expertise_metrics: List[ExpertiseMetrics] = field(default_factory=list)
    daily_metrics: List[DailyMetrics] = field(default_factory=list)
    project_stats: List[ProjectStatistics] = field(default_factory=list)
    totals: Optional[MonthlyTotals] = None
    specific_rates: SpecificTeamRates = field(default_factory=SpecificTeamRates)
    rate_summary: Dict[str, float] = field(default_factory=dict)
    grid_hash: str = ""

    @property
    def summary(self) -> MonthlySummary:
        """Per-month summary, without trends."""
        return MonthlySummary(
            month=self.month,
            totals=self.totals,
            specific_rates=self.specific_rates,
            team_rates={k: self.rate_summary.get(k, 0.0) for k in ("front", "back")},
            expertise_rates={
                k: self.rate_summary.get(k, 0.0) for k in ("ecommerce", "sur_mesure")
            },
        )

    @property
    def project_names(self) -> List[str]:
        return sorted(p.project_name for p in self.project_stats)

    def team_metrics_in_days(self) -> List[TeamMetrics]:
        return [tm.to_full_days() for tm in self.team_metrics]

    def expertise_metrics_in_days(self) -> List[ExpertiseMetrics]:
        return [em.to_full_days() for em in self.expertise_metrics]


@dataclass
class DashboardReport:
    """Result of processing a whole workbook."""
    months: List[MonthResult] = field(default_factory=list)
    summaries: List[MonthlySummary] = field(default_factory=list)
    consolidated: List[ConsolidatedDailyMetric] = field(default_factory=list)
    daily_rates: List[DailyRates] = field(default_factory=list)
    alerts: List[Alert] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)  # month -> reason

    @property
    def month_labels(self) -> List[str]:
        return [r.month for r in self.months]

    def get(self, month: str) -> Optional[MonthResult]:
        for result in self.months:
            if result.month == month:
                return result
        return None


def validate_month(label: str, grid: RawGrid, config: AnalysisConfig) -> None:
    """Raise InsufficientDataError when the month cannot be analysed."""
    if len(grid) < RULES.min_grid_rows:
        raise InsufficientDataError(
            label, f"{NO_WORKING_DAYS} ({len(grid)} rows, {RULES.min_grid_rows} required)"
        )
    if not working_day_slots(grid, label, config):
        raise InsufficientDataError(label, NO_WORKING_DAYS)


def process_month(
    label: str,
    grid: RawGrid,
    config: Optional[AnalysisConfig] = None,
) -> MonthResult:
    """Compute every metric of one month tab."""
    config = config or AnalysisConfig()
    validate_month(label, grid, config)

    rows = parse_rows(grid, config.schema, config.in_scope_category)
    working_days = working_days_in_month(
        label, exclude_holidays=config.exclude_holidays_from_capacity
    )

    team_metrics = compute_team_metrics(
        rows, working_days, config.teams, config.ignore_tokens, config.in_scope_category
    )
    expertise_metrics = compute_expertise_metrics(
        rows, working_days, config.expertise_cells, config.ignore_tokens,
        config.in_scope_category,
    )
    daily = compute_daily_metrics(grid, label, config)
    projects = compute_project_statistics(
        grid, config.schema, config.in_scope_category, config.ignore_tokens
    )

    return MonthResult(
        month=label,
        working_days=working_days,
        team_metrics=team_metrics,
        expertise_metrics=expertise_metrics,
        daily_metrics=daily,
        project_stats=projects,
        totals=monthly_totals(team_metrics),
        specific_rates=specific_team_rates(expertise_metrics),
        rate_summary=monthly_rate_summary(daily),
    )


def _month_result(label, grid, config, cache, report, plog):
    """Cached or fresh MonthResult; None (and a skipped entry) for a rejected month."""
    content_hash = grid_hash(grid, config)
    result = cache.get(label, content_hash) if cache is not None else None
    if result is None:
        try:
            result = process_month(label, grid, config)
        except InsufficientDataError as e:
            plog.check(label, False, e.reason)
            report.skipped[label] = e.reason
            return None
        result.grid_hash = content_hash
        if cache is not None:
            cache.put(label, content_hash, result)

    plog.check(label, True, f"{result.working_days} working days, "
                            f"{len(result.daily_metrics)} half-days")
    return result


def process_months(
    grids: Mapping[str, RawGrid],
    config: Optional[AnalysisConfig] = None,
    cache: Optional[MonthCache] = None,
) -> DashboardReport:
    """
    Process every month tab and consolidate the valid ones.

    Sheet names that are not "<FrenchMonthName> <year>" labels are ignored;
    months are processed in chronological order.

    Raises:
        NoValidMonthError: when no month could be analysed
    """
    config = config or AnalysisConfig()
    plog = PipelineLogger()
    # tab names may carry stray spaces; results are keyed by the clean label
    sheets = {name.strip(): name for name in grids}
    labels = filter_month_labels(sheets)
    plog.phase(f"Processing {len(labels)} months")

    report = DashboardReport()
    for label in labels:
        with plog.month(label):
            result = _month_result(label, grids[sheets[label]], config, cache, report, plog)
        if result is not None:
            report.months.append(result)

    if not report.months:
        logger.error(f"No valid month among {len(labels)} sheets")
        raise NoValidMonthError()

    plog.step("Consolidating")
    report.summaries = merge_monthly_summaries(r.summary for r in report.months)
    series = {r.month: r.daily_metrics for r in report.months}
    report.consolidated = consolidate_daily_metrics(series)
    report.daily_rates = aggregate_daily_metrics(flatten_series(series))
    report.alerts = generate_alerts(report.summaries, config)
    plog.detail("months", report.month_labels)
    plog.detail("skipped", report.skipped)
    return report
