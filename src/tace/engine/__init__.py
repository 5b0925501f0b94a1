# tace/engine - Metrics derivation engine
from .aggregator import compute_expertise_metrics, compute_project_statistics, compute_team_metrics
from .alerts import Alert, AlertLevel, generate_alerts
from .cache import MonthCache, grid_hash
from .consolidate import aggregate_daily_metrics, consolidate_daily_metrics, merge_monthly_summaries
from .daily import compute_daily_metrics, scan_daily
from .grid import excel_serial_to_date, parse_rows, scan_half_day_slots
from .pipeline import DashboardReport, MonthResult, process_month, process_months
from .rates import RatePolicy, activity_rate, daily_rate
from .workdays import easter_sunday, is_french_holiday, is_working_day, working_days_in_month

__all__ = [
    "working_days_in_month", "is_working_day", "is_french_holiday", "easter_sunday",
    "excel_serial_to_date", "scan_half_day_slots", "parse_rows",
    "activity_rate", "daily_rate", "RatePolicy",
    "compute_team_metrics", "compute_expertise_metrics", "compute_project_statistics",
    "compute_daily_metrics", "scan_daily",
    "consolidate_daily_metrics", "aggregate_daily_metrics", "merge_monthly_summaries",
    "process_month", "process_months", "MonthResult", "DashboardReport",
    "MonthCache", "grid_hash",
    "Alert", "AlertLevel", "generate_alerts",
]
