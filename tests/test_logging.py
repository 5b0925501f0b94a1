"""Tests for tace.utils.logging_setup."""
import logging

import pytest

from tace.engine.pipeline import process_months
from tace.utils.logging_setup import (
    TRACE,
    PipelineLogger,
    level_from_name,
    log_check,
    log_function_call,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_tace_logger():
    yield
    logger = logging.getLogger("tace")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


class TestSetup:
    def test_console_and_rotating_file(self, tmp_path):
        log_file = tmp_path / "logs" / "tace.log"
        logger = setup_logging(level="DEBUG", log_file=str(log_file), console_level="ERROR")

        assert logger.name == "tace"
        console, rotating = logger.handlers
        assert console.level == logging.ERROR
        assert rotating.level == logging.DEBUG

        logging.getLogger("tace.engine.grid").debug("slot scan done")
        rotating.flush()
        assert "tace.engine.grid" in log_file.read_text(encoding="utf-8")

    def test_console_only(self):
        assert len(setup_logging(log_file=None).handlers) == 1

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(log_file=None)
        assert len(setup_logging(log_file=None).handlers) == 1

    @pytest.mark.parametrize("name,expected", [
        ("trace", TRACE),
        ("WARNING", logging.WARNING),
        ("verbose", logging.INFO),
    ])
    def test_level_from_name(self, name, expected):
        assert level_from_name(name) == expected


class TestLogFunctionCall:
    def test_grid_arguments_are_summarised(self, caplog):
        @log_function_call
        def count_rows(grid, month):
            return len(grid)

        grid = [[None]] * 40
        with caplog.at_level(TRACE):
            assert count_rows(grid, month="Octobre 2025") == 40

        assert "→ count_rows(<list of 40>, month='Octobre 2025')" in caplog.text
        assert "← count_rows returned: 40" in caplog.text

    def test_failure_logged_and_raised(self, caplog):
        @log_function_call
        def broken():
            raise ValueError("bad header")

        with pytest.raises(ValueError):
            broken()
        assert "broken raised: ValueError: bad header" in caplog.text


class TestChecks:
    def test_failed_check_is_warning(self, caplog):
        with caplog.at_level(logging.DEBUG):
            log_check(logging.getLogger("test"), "Octobre 2025", True, "23 working days")
            log_check(logging.getLogger("test"), "Novembre 2025", False, "no working days detected")

        passed, failed = caplog.records
        assert passed.getMessage() == "[✓] Octobre 2025 (23 working days)"
        assert failed.levelno == logging.WARNING

    def test_month_context_nests_and_unwinds(self, caplog):
        plog = PipelineLogger("test.pipeline")
        with caplog.at_level(logging.DEBUG):
            with pytest.raises(RuntimeError):
                with plog.month("Octobre 2025"):
                    plog.detail("slots", 4)
                    raise RuntimeError("stop")

        assert plog.depth == 0
        assert "┌─ Octobre 2025" in caplog.text
        assert "    slots: 4" in caplog.text
        assert "└─ Octobre 2025" in caplog.text

    def test_skipped_month_is_warned(self, october_grid, caplog):
        with caplog.at_level(logging.WARNING, logger="tace"):
            process_months({"Octobre 2025": october_grid, "Novembre 2025": [[None]]})

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("[✗] Novembre 2025" in m for m in warnings)
