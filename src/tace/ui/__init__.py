# tace/ui - DataFrame and chart adapters
from .charts import daily_rates_chart, monthly_rates_chart, project_distribution_chart
from .tables import (
    daily_table,
    expertise_table,
    project_table,
    rate_level,
    summary_table,
    team_table,
)

__all__ = [
    "team_table", "expertise_table", "daily_table", "project_table", "summary_table",
    "rate_level",
    "monthly_rates_chart", "daily_rates_chart", "project_distribution_chart",
]
