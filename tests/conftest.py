"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from tace.models.config import AnalysisConfig

# Excel serials of October 2025
OCT_1 = 45931  # Wednesday
OCT_2 = 45932  # Thursday
OCT_4 = 45934  # Saturday


def make_grid(serials, people):
    """
    Build a month tab: title row, blank row, date header (each serial on two
    columns), then one row per (name, expertise, profile, category, cells).
    """
    header = [None] * 5 + [s for s in serials for _ in (0, 1)]
    width = len(header)
    grid = [["Planning"] + [None] * (width - 1), [None] * width, header]
    for name, expertise, profile, category, cells in people:
        row = [None, name, expertise, profile, category] + list(cells)
        grid.append(row + [None] * (width - len(row)))
    return grid


@pytest.fixture
def october_people():
    """Two CDS members and one out-of-scope row."""
    return [
        ("Alice", "E-commerce", "DEV FRONT", "CDS",
         ["Absence", "ProjetX", "Non-Aff", "Prévision", "ProjetY", "ProjetY"]),
        ("Bob", "Sur mesure", "DEV BACK", "CDS",
         ["ProjetX", "Interne", "ProjetX", "ProjetX", None, None]),
        ("Carl", "E-commerce", "DEV FRONT", "Freelance",
         ["ProjetZ", "ProjetZ", "ProjetZ", "ProjetZ", None, None]),
    ]


@pytest.fixture
def october_grid(october_people):
    """Octobre 2025 tab with Wed 1, Thu 2 and Sat 4 in the header."""
    return make_grid([OCT_1, OCT_2, OCT_4], october_people)


@pytest.fixture
def default_config():
    """Default analysis configuration."""
    return AnalysisConfig()
