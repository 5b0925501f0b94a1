"""Tests for Pydantic settings validation."""
import json

import pytest
from pydantic import ValidationError

from tace.errors import ConfigError
from tace.models.config import AnalysisConfig, GridSchema
from tace.models.validated import SETTINGS_ENV_VAR, ValidatedSettings, load_settings


class TestValidatedSettings:
    """Tests for ValidatedSettings."""

    def test_defaults(self):
        settings = ValidatedSettings()
        assert settings.in_scope_category == "CDS"
        assert settings.critical_threshold == 70.0
        assert settings.log_level == "INFO"

    def test_log_level_case_insensitive(self):
        assert ValidatedSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            ValidatedSettings(log_level="chatty")

    def test_threshold_order(self):
        with pytest.raises(ValidationError, match="critical_threshold"):
            ValidatedSettings(critical_threshold=90, warning_threshold=80)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ValidatedSettings(threshold=50)

    def test_assignment_validated(self):
        settings = ValidatedSettings()
        with pytest.raises(ValidationError):
            settings.max_scan_iterations = 2

    def test_to_dataclass(self):
        cfg = ValidatedSettings(
            in_scope_category="Studio", ignore_tokens=["RTT"], exclude_holidays_from_capacity=True
        ).to_dataclass()
        assert isinstance(cfg, AnalysisConfig)
        assert cfg.in_scope_category == "Studio"
        assert cfg.ignore_tokens == ("RTT",)
        assert cfg.exclude_holidays_from_capacity is True


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self, monkeypatch):
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        assert load_settings() == ValidatedSettings()

    def test_from_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"warning_threshold": 90, "spreadsheet_path": "p.xlsx"}))
        settings = load_settings(path)
        assert settings.warning_threshold == 90
        assert settings.spreadsheet_path == "p.xlsx"

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"log_level": "warning"}))
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
        assert load_settings().log_level == "WARNING"

    @pytest.mark.parametrize("content,message", [
        ("{not json", "Invalid JSON"),
        ("[1, 2]", "must be an object"),
        ('{"critical_threshold": 150}', "Invalid settings"),
    ])
    def test_invalid_files(self, tmp_path, content, message):
        path = tmp_path / "bad.json"
        path.write_text(content)
        with pytest.raises(ConfigError, match=message):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "absent.json")


class TestAnalysisConfig:
    def test_dict_round_trip(self):
        cfg = AnalysisConfig(schema=GridSchema(date_row=1), critical_threshold=60.0)
        restored = AnalysisConfig.from_dict(cfg.to_dict())
        assert restored.schema == cfg.schema
        assert restored.teams == cfg.teams
        assert restored.expertise_cells == cfg.expertise_cells
        assert restored.critical_threshold == 60.0

    def test_unknown_keys_ignored(self):
        assert AnalysisConfig.from_dict({"colour": "red"}) == AnalysisConfig()
