"""
French Working-Day Calendar
===========================
Weekday filter plus the 11 French public holidays (8 fixed dates and 3
Easter-relative ones). Easter Sunday uses the anonymous Gregorian
(Meeus/Jones/Butcher) algorithm.
"""
import calendar
from datetime import date, timedelta
from functools import lru_cache
from typing import Dict

from ..models.rules import RULES
from ..utils.logging_setup import get_logger
from .months import parse_month_label

logger = get_logger(__name__)

FIXED_HOLIDAYS = {
    (1, 1): "Jour de l'an",
    (5, 1): "Fête du Travail",
    (5, 8): "Victoire 1945",
    (7, 14): "Fête nationale",
    (8, 15): "Assomption",
    (11, 1): "Toussaint",
    (11, 11): "Armistice 1918",
    (12, 25): "Noël",
}

# Offsets from Easter Sunday
EASTER_HOLIDAYS = {
    1: "Lundi de Pâques",
    39: "Ascension",
    50: "Lundi de Pentecôte",
}


def easter_sunday(year: int) -> date:
    """Easter Sunday of a Gregorian year (integer arithmetic only)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


@lru_cache(maxsize=64)
def french_holidays(year: int) -> Dict[date, str]:
    """Named public holidays of ``year``."""
    holidays = {date(year, m, d): name for (m, d), name in FIXED_HOLIDAYS.items()}
    easter = easter_sunday(year)
    for offset, name in EASTER_HOLIDAYS.items():
        holidays[easter + timedelta(days=offset)] = name
    return holidays


def is_french_holiday(d: date) -> bool:
    return d in french_holidays(d.year)


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


def is_working_day(d: date) -> bool:
    """Weekday and not a public holiday."""
    return not is_weekend(d) and not is_french_holiday(d)


def working_days_between(year: int, month: int, exclude_holidays: bool = False) -> int:
    """Mon-Fri days of a month, optionally without public holidays."""
    _, last = calendar.monthrange(year, month)
    count = 0
    for day in range(1, last + 1):
        d = date(year, month, day)
        if is_weekend(d):
            continue
        if exclude_holidays and is_french_holiday(d):
            continue
        count += 1
    return count


def working_days_in_month(month_label: str, exclude_holidays: bool = False) -> int:
    """
    Working days of a "<FrenchMonthName> <year>" month.

    Unparseable labels fall back to the default (22) with a warning; this
    never raises.
    """
    parsed = parse_month_label(month_label)
    if parsed is None:
        logger.warning(
            f"Unparseable month label {month_label!r}, "
            f"using {RULES.default_working_days} working days"
        )
        return RULES.default_working_days
    year, month = parsed
    count = working_days_between(year, month, exclude_holidays=exclude_holidays)
    logger.debug(f"{month_label}: {count} working days (holidays excluded={exclude_holidays})")
    return count
