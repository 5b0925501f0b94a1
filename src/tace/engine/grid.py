"""
Sheet Grid Parser
=================
Turns a raw 2-D grid (list of rows of str/number/None cells) into typed
person records and half-day slot descriptors.

Header row 2 holds Excel serial dates; each calendar day spans two
consecutive columns with the same serial (morning, afternoon).
"""
import math
from dataclasses import dataclass
from datetime import date, timedelta
from numbers import Real
from typing import Any, List, Optional, Sequence

from ..models.config import DEFAULT_SCHEMA, GridSchema
from ..models.person import IN_SCOPE_CATEGORY, PersonRecord
from ..models.rules import RULES
from ..utils.logging_setup import TRACE, get_logger, log_function_call

logger = get_logger(__name__)

RawGrid = Sequence[Sequence[Any]]

EXCEL_EPOCH = date(1899, 12, 30)


@dataclass(frozen=True)
class SlotDescriptor:
    """A working-day candidate: the (morning, afternoon) column pair of one day."""
    morning_col: int
    afternoon_col: int
    day: date
    serial: float


def cell_at(row: Sequence[Any], index: int) -> Any:
    """Cell value or None when the row is shorter than ``index``."""
    return row[index] if 0 <= index < len(row) else None


def is_serial(value: Any) -> bool:
    """Numeric, non-zero, non-bool, finite."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return bool(value) and math.isfinite(value)


def excel_serial_to_date(serial: float) -> date:
    """
    Convert an Excel serial date (1900 system) to a date.

    Days counted from 1899-12-30, which absorbs Excel's fictitious
    1900-02-29: serial 2 -> 1900-01-01, 45931 -> 2025-10-01.
    """
    return EXCEL_EPOCH + timedelta(days=math.floor(serial))


def date_to_excel_serial(d: date) -> int:
    return (d - EXCEL_EPOCH).days


def _serial_date(value: Any) -> Optional[date]:
    try:
        return excel_serial_to_date(value)
    except (OverflowError, ValueError):
        return None


def scan_half_day_slots(
    grid: RawGrid,
    target_month: int,
    schema: GridSchema = DEFAULT_SCHEMA,
    max_iterations: int = RULES.max_scan_iterations,
) -> List[SlotDescriptor]:
    """
    Walk the date header and pair columns into half-day slots.

    A column is accepted when its value is a serial date of ``target_month``
    and the next column holds the same value; the scan then jumps over the
    pair. Any other column is skipped alone, so the next one is examined on
    its own. The iteration cap silently truncates malformed headers.
    """
    if len(grid) <= schema.date_row:
        return []
    header = grid[schema.date_row]

    slots: List[SlotDescriptor] = []
    col = schema.first_slot_col
    iterations = 0
    while col < len(header) and iterations < max_iterations:
        iterations += 1
        value = header[col]
        if not is_serial(value):
            col += 1
            continue

        day = _serial_date(value)
        if day is None or day.month != target_month:
            col += 1
            continue

        nxt = cell_at(header, col + 1)
        if not is_serial(nxt) or nxt != value:
            logger.log(TRACE, f"col {col}: unpaired serial {value!r} (next={nxt!r})")
            col += 1
            continue

        slots.append(SlotDescriptor(col, col + 1, day, value))
        col += 2

    if col < len(header) and iterations >= max_iterations:
        logger.debug(f"Slot scan truncated at column {col} after {iterations} iterations")
    return slots


def classify_person(
    row: Sequence[Any],
    schema: GridSchema = DEFAULT_SCHEMA,
    in_scope_category: str = IN_SCOPE_CATEGORY,
    row_index: int = 0,
) -> Optional[PersonRecord]:
    """PersonRecord for an in-scope row, None otherwise."""
    category = cell_at(row, schema.category_col)
    if category is None or str(category).strip() != in_scope_category:
        return None
    return PersonRecord(
        name=cell_at(row, schema.name_col),
        profile=cell_at(row, schema.profile_col),
        expertise=cell_at(row, schema.expertise_col),
        category=category,
        cells=tuple(row[schema.first_slot_col:]),
        row_index=row_index,
    )


@log_function_call
def parse_rows(
    grid: RawGrid,
    schema: GridSchema = DEFAULT_SCHEMA,
    in_scope_category: str = IN_SCOPE_CATEGORY,
) -> List[PersonRecord]:
    """In-scope records of every data row."""
    records = []
    for index in range(schema.first_data_row, len(grid)):
        record = classify_person(grid[index], schema, in_scope_category, row_index=index)
        if record is not None:
            records.append(record)
    logger.debug(f"{len(records)} in-scope rows out of {max(0, len(grid) - schema.first_data_row)}")
    return records


def slot_cell(record: PersonRecord, column: int, schema: GridSchema = DEFAULT_SCHEMA) -> Any:
    """Status cell of ``record`` at an absolute sheet column."""
    return cell_at(record.cells, column - schema.first_slot_col)


def working_days_from_grid(grid: RawGrid, schema: GridSchema = DEFAULT_SCHEMA) -> int:
    """Number of distinct non-empty values in the date header."""
    if len(grid) <= schema.date_row:
        return 0
    header = grid[schema.date_row]
    unique = {
        str(v) for v in header[schema.first_slot_col:]
        if v is not None and str(v).strip() != ""
    }
    return len(unique)
