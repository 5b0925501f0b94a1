"""Tests for the sheet grid parser."""
import math
from datetime import date

from tace.engine.grid import (
    date_to_excel_serial,
    excel_serial_to_date,
    is_serial,
    parse_rows,
    scan_half_day_slots,
    slot_cell,
    working_days_from_grid,
)

from conftest import OCT_1, OCT_2, OCT_4, make_grid


def _header_grid(values):
    return [[], [], [None] * 5 + list(values)]


class TestExcelSerials:
    def test_epoch(self):
        assert excel_serial_to_date(OCT_1) == date(2025, 10, 1)
        assert excel_serial_to_date(2) == date(1900, 1, 1)

    def test_fractional_serial_floors(self):
        assert excel_serial_to_date(OCT_1 + 0.75) == date(2025, 10, 1)

    def test_round_trip_date(self):
        assert date_to_excel_serial(date(2025, 10, 4)) == OCT_4

    def test_is_serial(self):
        assert is_serial(45931)
        assert is_serial(45931.0)
        assert not is_serial(0)
        assert not is_serial(True)
        assert not is_serial("45931")
        assert not is_serial(math.nan)
        assert not is_serial(None)


class TestSlotScan:
    """Tests for header pairing."""

    def test_pairs_consecutive_columns(self):
        slots = scan_half_day_slots(_header_grid([OCT_1, OCT_1, OCT_2, OCT_2]), 10)
        assert [(s.morning_col, s.afternoon_col) for s in slots] == [(5, 6), (7, 8)]
        assert slots[0].day == date(2025, 10, 1)

    def test_unpaired_column_skipped_alone(self):
        """An orphan serial does not consume the next column."""
        slots = scan_half_day_slots(_header_grid([OCT_1, OCT_2, OCT_2]), 10)
        assert len(slots) == 1
        assert slots[0].morning_col == 6
        assert slots[0].day == date(2025, 10, 2)

    def test_other_months_ignored(self):
        sept_30 = OCT_1 - 1
        slots = scan_half_day_slots(_header_grid([sept_30, sept_30, OCT_1, OCT_1]), 10)
        assert [s.day for s in slots] == [date(2025, 10, 1)]

    def test_text_and_blank_headers_skipped(self):
        slots = scan_half_day_slots(_header_grid(["Semaine 40", None, OCT_1, OCT_1]), 10)
        assert [s.morning_col for s in slots] == [7]

    def test_iteration_cap_truncates(self):
        values = [None] * 20 + [OCT_1, OCT_1]
        assert scan_half_day_slots(_header_grid(values), 10, max_iterations=10) == []
        assert len(scan_half_day_slots(_header_grid(values), 10, max_iterations=100)) == 1

    def test_missing_header_row(self):
        assert scan_half_day_slots([[], []], 10) == []


class TestParseRows:
    def test_only_in_scope_rows(self, october_grid):
        rows = parse_rows(october_grid)
        assert [p.name for p in rows] == ["Alice", "Bob"]
        assert rows[0].profile == "DEV FRONT"
        assert rows[0].expertise == "E-commerce"
        assert rows[0].row_index == 3

    def test_custom_category(self, october_grid):
        assert [p.name for p in parse_rows(october_grid, in_scope_category="Freelance")] == ["Carl"]

    def test_slot_cell_uses_sheet_columns(self, october_grid):
        alice = parse_rows(october_grid)[0]
        assert slot_cell(alice, 5) == "Absence"
        assert slot_cell(alice, 6) == "ProjetX"
        assert slot_cell(alice, 99) is None

    def test_working_days_from_grid(self):
        grid = make_grid([OCT_1, OCT_2, OCT_4], [])
        assert working_days_from_grid(grid) == 3
        assert working_days_from_grid([[]]) == 0
