"""Person record for a staff row of the planning sheet."""
from dataclasses import dataclass, field
from typing import Any, Tuple

# Profile column values
DEV_FRONT = "DEV FRONT"
DEV_BACK = "DEV BACK"
CDP = "CdP"
GRAPHISTE = "GRAPHISTE"
PROFILES = (DEV_FRONT, DEV_BACK, CDP, GRAPHISTE)

# Expertise column values
ECOMMERCE = "E-commerce"
SUR_MESURE = "Sur mesure"
EXPERTISES = (ECOMMERCE, SUR_MESURE)

IN_SCOPE_CATEGORY = "CDS"


@dataclass(frozen=True)
class PersonRecord:
    """One data row of the sheet, typed."""

    name: str
    profile: str = ""
    expertise: str = ""
    category: str = ""

    # Raw half-day status cells (column 5 onwards)
    cells: Tuple[Any, ...] = field(default=(), compare=False, repr=False)

    # Position of the row in the source grid
    row_index: int = field(default=0, compare=False)

    def __post_init__(self):
        """Normalize text fields."""
        object.__setattr__(self, "name", str(self.name or "").strip())
        object.__setattr__(self, "profile", str(self.profile or "").strip())
        object.__setattr__(self, "expertise", str(self.expertise or "").strip())
        object.__setattr__(self, "category", str(self.category or "").strip())

    @property
    def is_in_scope(self) -> bool:
        """Only CDS staff count toward capacity."""
        return self.category == IN_SCOPE_CATEGORY

    def matches(self, profile: str = "", expertise: str = "") -> bool:
        """Pure predicate over (profile, expertise); empty filters match all."""
        if profile and self.profile != profile:
            return False
        if expertise and self.expertise != expertise:
            return False
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "profile": self.profile,
            "expertise": self.expertise,
            "category": self.category,
            "is_in_scope": self.is_in_scope,
        }
