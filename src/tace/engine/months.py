"""French month labels ("Octobre 2025") used as sheet names."""
import re
from typing import Iterable, List, Optional, Tuple

from ..utils.logging_setup import get_logger

logger = get_logger(__name__)

FRENCH_MONTHS: Tuple[str, ...] = (
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
)

MONTH_NUMBERS = {name: i for i, name in enumerate(FRENCH_MONTHS, start=1)}

_LABEL_RE = re.compile(r"^\s*(" + "|".join(FRENCH_MONTHS) + r")\s+(\d{4})\s*$")


def parse_month_label(label: str) -> Optional[Tuple[int, int]]:
    """Return (year, month) for "<FrenchMonthName> <year>", None if unparseable."""
    if not isinstance(label, str):
        return None
    m = _LABEL_RE.match(label)
    if not m:
        return None
    return int(m.group(2)), MONTH_NUMBERS[m.group(1)]


def is_month_label(label: str) -> bool:
    return parse_month_label(label) is not None


def month_label(year: int, month: int) -> str:
    return f"{FRENCH_MONTHS[month - 1]} {year}"


def month_sort_key(label: str) -> Tuple[int, int]:
    """Chronological key; unparseable labels sort first."""
    return parse_month_label(label) or (0, 0)


def sort_month_labels(labels: Iterable[str]) -> List[str]:
    return sorted(labels, key=month_sort_key)


def filter_month_labels(sheet_names: Iterable[str]) -> List[str]:
    """Keep the sheet names that are month labels, in chronological order."""
    kept = []
    for name in sheet_names:
        if is_month_label(name):
            kept.append(name.strip())
        else:
            logger.debug(f"Ignoring non-month sheet: {name!r}")
    return sort_month_labels(kept)
