"""
Pydantic Validated Settings
===========================
Validation layer for the JSON settings file.

Usage:
    from tace.models.validated import load_settings

    settings = load_settings("settings.json")
    config = settings.to_dataclass()

The settings file may also be located through the ``TACE_SETTINGS``
environment variable.
"""
import json
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..errors import ConfigError
from .status import IGNORE_TOKENS

SETTINGS_ENV_VAR = "TACE_SETTINGS"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


class ValidatedSettings(BaseModel):
    """
    Pydantic-validated dashboard settings.

    Use this at the settings-file boundary; the pipeline itself consumes the
    dataclass ``AnalysisConfig`` returned by ``to_dataclass()``.
    """
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    # Spreadsheet locator
    spreadsheet_path: Optional[str] = Field(default=None, description="Workbook (.xlsx) or CSV file")

    # Grid
    in_scope_category: str = Field(default="CDS", min_length=1)
    ignore_tokens: List[str] = Field(default_factory=lambda: list(IGNORE_TOKENS))
    max_scan_iterations: int = Field(default=100, ge=10, le=1000)

    # Calendar policy
    exclude_holidays_from_capacity: bool = Field(default=False)
    skip_holidays_in_daily: bool = Field(default=True)

    # Alerts
    critical_threshold: float = Field(default=70.0, ge=0, le=100)
    warning_threshold: float = Field(default=85.0, ge=0, le=100)
    trend_warning_threshold: float = Field(default=-5.0, le=0)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default="logs/tace.log")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept level names case-insensitively."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def validate_model(self):
        """Cross-field validation."""
        if self.critical_threshold > self.warning_threshold:
            raise ValueError("critical_threshold cannot exceed warning_threshold")
        return self

    def to_dataclass(self):
        """Convert to the dataclass AnalysisConfig used by the pipeline."""
        from .config import AnalysisConfig

        return AnalysisConfig(
            in_scope_category=self.in_scope_category,
            ignore_tokens=tuple(self.ignore_tokens),
            max_scan_iterations=self.max_scan_iterations,
            exclude_holidays_from_capacity=self.exclude_holidays_from_capacity,
            skip_holidays_in_daily=self.skip_holidays_in_daily,
            critical_threshold=self.critical_threshold,
            warning_threshold=self.warning_threshold,
            trend_warning_threshold=self.trend_warning_threshold,
        )


def settings_path_from_env() -> Optional[Path]:
    """Path named by TACE_SETTINGS, if set."""
    value = os.environ.get(SETTINGS_ENV_VAR, "").strip()
    return Path(value) if value else None


def load_settings(path: Optional[Union[str, Path]] = None) -> ValidatedSettings:
    """
    Load and validate a JSON settings file.

    Falls back to ``$TACE_SETTINGS`` and then to defaults when no path is
    given. Raises ConfigError on unreadable JSON or invalid values.
    """
    if path is None:
        path = settings_path_from_env()
    if path is None:
        return ValidatedSettings()

    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Settings file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top-level value must be an object")

    try:
        return ValidatedSettings(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e
