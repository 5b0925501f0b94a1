"""
Activity Alerts
===============
Threshold and trend alerts computed on the latest monthly summary.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..models.config import AnalysisConfig
from ..models.metrics import MonthlySummary
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)


class AlertLevel(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def priority(self) -> int:
        return {"critical": 0, "warning": 1, "info": 2}[self.value]


@dataclass(frozen=True)
class Alert:
    level: AlertLevel
    title: str
    message: str
    month: str
    metric: str = ""
    value: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "title": self.title,
            "message": self.message,
            "month": self.month,
            "metric": self.metric,
            "value": self.value,
        }


# (label, key in MonthlySummary.rate_values())
CHECKED_RATES = (
    ("Taux global réel", "real_rate"),
    ("Front E-commerce", "front_ecommerce_rate"),
    ("Back E-commerce", "back_ecommerce_rate"),
    ("Front Sur mesure", "front_sur_mesure_rate"),
    ("Back Sur mesure", "back_sur_mesure_rate"),
)

DECLINE_WINDOW = 3


def check_rate(
    month: str,
    metric: str,
    rate: float,
    trend: Optional[float],
    config: AnalysisConfig,
) -> Optional[Alert]:
    """At most one alert per rate: critical, then warning, then steep decline."""
    if rate < config.critical_threshold:
        return Alert(
            AlertLevel.CRITICAL,
            f"{metric} critique",
            f"Le taux de {metric} est de {rate:.1f}%, bien en dessous du seuil "
            f"recommandé de {config.critical_threshold:g}%.",
            month, metric, rate,
        )
    if rate < config.warning_threshold:
        return Alert(
            AlertLevel.WARNING,
            f"{metric} en baisse",
            f"Le taux de {metric} est de {rate:.1f}%, légèrement en dessous du seuil "
            f"optimal de {config.warning_threshold:g}%.",
            month, metric, rate,
        )
    if trend is not None and trend < config.trend_warning_threshold:
        return Alert(
            AlertLevel.WARNING,
            f"{metric} en forte baisse",
            f"Le taux de {metric} a diminué de {abs(trend):.1f}% par rapport au mois précédent.",
            month, metric, rate,
        )
    return None


def check_prolonged_decline(summaries: Sequence[MonthlySummary]) -> Optional[Alert]:
    """Warning when the global real rate fell in each of the last months."""
    if len(summaries) < DECLINE_WINDOW:
        return None
    window = summaries[-DECLINE_WINDOW:]
    rates = [s.real_rate for s in window]
    if any(r is None for r in rates):
        return None
    declines = sum(1 for before, now in zip(rates, rates[1:]) if now < before)
    if declines < DECLINE_WINDOW - 1:
        return None
    return Alert(
        AlertLevel.WARNING,
        "Tendance négative prolongée",
        f"Le taux d'activité global diminue depuis {declines} mois consécutifs.",
        window[-1].month,
        "Tendance globale",
    )


def generate_alerts(
    summaries: Sequence[MonthlySummary],
    config: Optional[AnalysisConfig] = None,
) -> List[Alert]:
    """
    Alerts for the latest month of chronologically ordered summaries.

    Returns a single info alert when nothing is below threshold, and an
    empty list when there are no summaries. Sorted critical > warning > info.
    """
    config = config or AnalysisConfig()
    if not summaries:
        return []

    current = summaries[-1]
    values = current.rate_values()
    trends = current.trends or {}

    alerts = []
    for metric, key in CHECKED_RATES:
        if key not in values:
            continue
        alert = check_rate(current.month, metric, values[key], trends.get(key), config)
        if alert:
            alerts.append(alert)

    decline = check_prolonged_decline(summaries)
    if decline:
        alerts.append(decline)

    if not alerts:
        alerts.append(Alert(
            AlertLevel.INFO,
            "Excellentes performances",
            f"Tous les taux d'activité de {current.month} sont au-dessus des seuils recommandés.",
            current.month,
        ))

    alerts.sort(key=lambda a: a.level.priority)
    logger.debug(f"{current.month}: {len(alerts)} alerts")
    return alerts
