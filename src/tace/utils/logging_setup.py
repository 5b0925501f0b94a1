"""
TACE — Logging
==============
Every module logs under the ``tace`` hierarchy through ``get_logger``.

Levels:
    TRACE (5): Entry/exit of the compute_* functions
    DEBUG (10): Per-month counters, slot scan details
    INFO (20): Pipeline progress
    WARNING (30): Skipped months, malformed labels
    ERROR (40): Unreadable workbooks, no valid month

Console output goes to stderr so the CLI can print tables and JSON on stdout.
"""
import functools
import logging
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

ROOT_LOGGER = "tace"
DEFAULT_LOG_FILE = "logs/tace.log"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


class LevelColorFormatter(logging.Formatter):
    """Colors the level name when the stream is a terminal."""

    LEVEL_COLORS = {
        TRACE: "90",
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def __init__(self, fmt: str, datefmt: str, use_color: bool):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        code = self.LEVEL_COLORS.get(record.levelno)
        if not (self.use_color and code):
            return text
        return text.replace(record.levelname, f"\033[{code}m{record.levelname}\033[0m", 1)


def level_from_name(name: str) -> int:
    """Numeric level for a name such as "trace" or "WARNING" (INFO when unknown)."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = DEFAULT_LOG_FILE,
    console_level: Optional[str] = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the ``tace`` logger: a console handler and, unless
    ``log_file`` is None, a size-rotated file handler.

    Calling it again replaces the previous handlers.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(TRACE)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level_from_name(console_level or level))
    console.setFormatter(LevelColorFormatter(CONSOLE_FORMAT, "%H:%M:%S", sys.stderr.isatty()))
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count,
                                       encoding="utf-8")
        rotating.setLevel(level_from_name(level))
        rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(rotating)

    root.debug(f"Logging ready (console={console.level}, file={log_file or 'off'})")
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _brief(value: Any) -> str:
    # grids are lists of rows; never dump them whole
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"<{type(value).__name__} of {len(value)}>"
    if isinstance(value, dict) and len(value) > 3:
        return f"<dict of {len(value)}>"
    text = repr(value)
    return text if len(text) <= 60 else text[:57] + "..."


def log_function_call(func: Callable) -> Callable:
    """Trace entry, result and failure of ``func`` at TRACE level."""
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(TRACE):
            shown = [_brief(a) for a in args] + [f"{k}={_brief(v)}" for k, v in kwargs.items()]
            logger.log(TRACE, f"→ {func.__name__}({', '.join(shown)})")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {func.__name__} raised: {type(e).__name__}: {e}")
            raise
        logger.log(TRACE, f"← {func.__name__} returned: {_brief(result)}")
        return result

    return wrapper


def log_check(logger: logging.Logger, name: str, passed: bool, details: str = "",
              level: int = logging.DEBUG):
    """Log a pass/fail data check; failures are warnings."""
    msg = f"[{'✓' if passed else '✗'}] {name}"
    if details:
        msg += f" ({details})"
    logger.log(level if passed else logging.WARNING, msg)


class PipelineLogger:
    """Indented progress log for process_months: phases, months, checks."""

    def __init__(self, name: str = "tace.engine.pipeline"):
        self.logger = logging.getLogger(name)
        self.depth = 0

    def _pad(self) -> str:
        return "  " * self.depth

    def phase(self, title: str):
        self.logger.info(f"── {title} ──")

    def step(self, description: str):
        self.logger.info(f"{self._pad()}▸ {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{self._pad()}  {key}: {value}")

    def check(self, name: str, passed: bool, details: str = ""):
        log_check(self.logger, name, passed, details)

    @contextmanager
    def month(self, label: str) -> Iterator[None]:
        """Nest the messages logged while ``label`` is processed."""
        self.logger.debug(f"{self._pad()}┌─ {label}")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            self.logger.debug(f"{self._pad()}└─ {label}")
