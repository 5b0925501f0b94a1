"""
Month Cache
===========
In-memory memoization of processed months, keyed by month label.
An entry is only reused when the grid content hash matches.
"""
import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models.config import AnalysisConfig
from ..utils.logging_setup import get_logger
from .grid import RawGrid

logger = get_logger(__name__)


def _json_cell(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def grid_hash(grid: RawGrid, config: Optional[AnalysisConfig] = None) -> str:
    """
    Content hash of a grid (and of the config used to process it).

    Returns:
        16-character hex hash
    """
    data = {"grid": [[_json_cell(v) for v in row] for row in grid]}
    if config is not None:
        data["config"] = config.to_dict()
    json_str = json.dumps(data, sort_keys=True, ensure_ascii=False)
    return hashlib.sha256(json_str.encode()).hexdigest()[:16]


@dataclass
class CacheEntry:
    grid_hash: str
    result: Any
    calculated_at: datetime = field(default_factory=datetime.now)


class MonthCache:
    """Dict-backed cache of month results."""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, month: str, content_hash: str) -> Optional[Any]:
        """Cached result for ``month`` if it was computed from the same content."""
        entry = self._entries.get(month)
        if entry is None or entry.grid_hash != content_hash:
            self.misses += 1
            return None
        self.hits += 1
        logger.debug(f"Cache hit: {month} ({content_hash})")
        return entry.result

    def put(self, month: str, content_hash: str, result: Any) -> None:
        self._entries[month] = CacheEntry(content_hash, result)

    def invalidate(self, month: Optional[str] = None) -> None:
        """Drop one month, or everything when ``month`` is None."""
        if month is None:
            self._entries.clear()
        else:
            self._entries.pop(month, None)

    def months(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, month: str) -> bool:
        return month in self._entries

    def __len__(self) -> int:
        return len(self._entries)
