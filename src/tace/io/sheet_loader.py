"""
Grid Suppliers
==============
Read month tabs from a local workbook (.xlsx) or CSV export into raw 2-D
grids, one per sheet name.
"""
import concurrent.futures
import io
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import pandas as pd
from openpyxl import load_workbook

from ..engine.grid import date_to_excel_serial
from ..errors import GridLoadError
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)

Source = Union[str, Path, io.BytesIO, bytes]
Grid = List[List[Any]]


def normalize_cell(value: Any) -> Any:
    """
    Normalize a cell to str | int | float | None.

    Date cells become Excel serials (a date-formatted header reads back as a
    datetime); integral floats become ints; NaN becomes None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return date_to_excel_serial(value.date())
    if isinstance(value, date):
        return date_to_excel_serial(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, int):
        return value
    return str(value)


def _coerce_text(value: Any) -> Any:
    """Numbers stored as text in CSV exports become numbers again."""
    value = normalize_cell(value)
    if not isinstance(value, str):
        return value
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text.replace(",", "."))
    except ValueError:
        return value
    return normalize_cell(number)


def _as_stream(source: Source):
    if isinstance(source, bytes):
        return io.BytesIO(source)
    return source


def load_workbook_grids(source: Source, sheet_names: Optional[List[str]] = None) -> Dict[str, Grid]:
    """
    Read every sheet (or ``sheet_names``) of an .xlsx workbook.

    Raises:
        GridLoadError: unreadable workbook or missing sheet
    """
    try:
        wb = load_workbook(_as_stream(source), read_only=True, data_only=True)
    except Exception as e:
        raise GridLoadError(f"Cannot read workbook: {e}") from e

    try:
        names = sheet_names if sheet_names is not None else wb.sheetnames
        grids: Dict[str, Grid] = {}
        for name in names:
            if name not in wb.sheetnames:
                raise GridLoadError(f"Sheet not found: {name}")
            ws = wb[name]
            grids[name] = [
                [normalize_cell(v) for v in row]
                for row in ws.iter_rows(values_only=True)
            ]
            logger.debug(f"Sheet {name!r}: {len(grids[name])} rows")
    finally:
        wb.close()
    return grids


def list_sheet_names(source: Source) -> List[str]:
    try:
        wb = load_workbook(_as_stream(source), read_only=True)
    except Exception as e:
        raise GridLoadError(f"Cannot read workbook: {e}") from e
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()


def load_csv_grid(source: Union[str, Path, io.StringIO, io.BytesIO]) -> Grid:
    """
    Read one month tab exported as CSV (no header row).

    Raises:
        GridLoadError: unreadable CSV
    """
    try:
        df = pd.read_csv(source, header=None, dtype=str, keep_default_na=False)
    except Exception as e:
        raise GridLoadError(f"Cannot read CSV: {e}") from e
    grid = []
    for row in df.itertuples(index=False):
        grid.append([None if v == "" else _coerce_text(v) for v in row])
    return grid


def load_grids_concurrently(
    loaders: Mapping[str, Callable[[], Grid]],
    max_workers: int = 4,
) -> Dict[str, Grid]:
    """
    Fan out grid suppliers (one callable per month label) on a thread pool.

    Failed suppliers are logged and left out of the result; GridLoadError is
    raised only when every supplier failed.
    """
    grids: Dict[str, Grid] = {}
    if not loaders:
        return grids

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(loader): label for label, loader in loaders.items()}
        for future in concurrent.futures.as_completed(futures):
            label = futures[future]
            try:
                grids[label] = future.result()
            except Exception as e:
                logger.error(f"Loading {label} failed: {e}")

    if not grids:
        raise GridLoadError(f"All {len(loaders)} grid suppliers failed")
    # Keep the caller's order
    return {label: grids[label] for label in loaders if label in grids}


def load_grids(path: Union[str, Path]) -> Dict[str, Grid]:
    """
    Load grids from a path: an .xlsx workbook, a single CSV (named after
    its file stem) or a directory of CSV files.
    """
    path = Path(path)
    if path.is_dir():
        csv_files = sorted(path.glob("*.csv"))
        return load_grids_concurrently({
            f.stem: (lambda f=f: load_csv_grid(f)) for f in csv_files
        }) if csv_files else {}
    if not path.exists():
        raise GridLoadError(f"File not found: {path}")
    if path.suffix.lower() == ".csv":
        return {path.stem: load_csv_grid(path)}
    return load_workbook_grids(path)
