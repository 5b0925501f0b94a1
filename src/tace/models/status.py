"""Status cell classification for half-day cells."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence, Tuple


class StatusKind(str, Enum):
    """What a half-day status cell means for capacity."""
    ABSENCE = "Absence"
    INTERNE = "Interne"
    NON_AFFECTED = "Non-Aff"
    PREVISION = "Prévision"
    PROJECT = "Projet"
    EMPTY = ""

    @property
    def is_reserved(self) -> bool:
        """True for the status keywords that never name a project."""
        return self in (
            StatusKind.ABSENCE,
            StatusKind.INTERNE,
            StatusKind.NON_AFFECTED,
            StatusKind.PREVISION,
        )

    @property
    def counter(self) -> str:
        """Name of the StatusCounts field this kind increments ("" if none)."""
        return {
            StatusKind.ABSENCE: "absences",
            StatusKind.INTERNE: "interne",
            StatusKind.NON_AFFECTED: "non_affected",
            StatusKind.PREVISION: "prevision",
        }.get(self, "")


# Evaluated in order, first substring match wins (case-sensitive).
STATUS_RULES: Tuple[Tuple[str, StatusKind], ...] = (
    ("Absence", StatusKind.ABSENCE),
    ("Interne", StatusKind.INTERNE),
    ("Non-Aff", StatusKind.NON_AFFECTED),
    ("Prévision", StatusKind.PREVISION),
)

# Cells made of these words are neither a status nor a project.
IGNORE_TOKENS: Tuple[str, ...] = ("OUT", "congé", "conge")

_WORD_RE = re.compile(r"\w+")


@dataclass(frozen=True)
class CellStatus:
    """Classified half-day cell."""
    kind: StatusKind
    label: str = ""  # Project name for PROJECT, keyword otherwise

    @property
    def is_project(self) -> bool:
        return self.kind == StatusKind.PROJECT


EMPTY_CELL = CellStatus(StatusKind.EMPTY)


def cell_text(value: Any) -> str:
    """Render a raw grid cell as text (None -> "", 12.0 -> "12")."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_ignored(text: str, ignore_tokens: Iterable[str] = IGNORE_TOKENS) -> bool:
    """True if a word of ``text`` is an ignore token (case-insensitive, plural tolerated)."""
    tokens = {t.casefold() for t in ignore_tokens}
    for word in _WORD_RE.findall(text.casefold()):
        if word in tokens or (word.endswith("s") and word[:-1] in tokens):
            return True
    return False


def classify_cell(
    value: Any,
    rules: Sequence[Tuple[str, StatusKind]] = STATUS_RULES,
    ignore_tokens: Iterable[str] = IGNORE_TOKENS,
) -> CellStatus:
    """
    Classify a raw status cell.

    Keywords are matched by case-sensitive substring containment in rule
    order; the first match wins. Remaining non-empty text is a project
    label unless it is made of an ignore token.
    """
    text = cell_text(value)
    for keyword, kind in rules:
        if keyword in text:
            return CellStatus(kind, keyword)

    label = text.strip()
    if not label or is_ignored(label, ignore_tokens):
        return EMPTY_CELL
    return CellStatus(StatusKind.PROJECT, label)
