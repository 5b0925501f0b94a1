# tace/io - Input/output handling
from .excel_export import export_dashboard, export_projects
from .sheet_loader import load_csv_grid, load_grids, load_grids_concurrently, load_workbook_grids

__all__ = [
    "load_workbook_grids", "load_csv_grid", "load_grids_concurrently", "load_grids",
    "export_dashboard", "export_projects",
]
