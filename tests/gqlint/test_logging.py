"""Tests for centralized logging configuration using Loguru."""

from pathlib import Path

from loguru import logger

import gqlint.logging as logging_module
from gqlint.logging import configure_logging, get_logger


def _reset() -> None:
    logger.remove()
    logging_module._CURRENT_CONFIG = None
    logging_module._HANDLER_IDS.clear()


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_returns_bound_logger(self):
        """Test that get_logger returns a bound logger instance."""
        assert get_logger("gqlint.test") is not None

    def test_get_logger_caches_results(self):
        """Test that get_logger caches logger instances."""
        assert get_logger("gqlint.cache") is get_logger("gqlint.cache")

    def test_logger_binds_module_name(self, log_capture):
        """Test that records carry the module name."""
        get_logger("gqlint.bound").warning("hello {}", "world")
        record = next(r for r in log_capture if r["message"] == "hello world")
        assert record["extra"]["module"] == "gqlint.bound"
        assert record["level"] == "WARNING"


class TestConfigureLogging:
    """Test configure_logging function."""

    def setup_method(self):
        """Reset logging configuration before each test."""
        _reset()

    def teardown_method(self):
        """Leave a clean configuration for the following tests."""
        _reset()

    def test_configures_json_format(self):
        """Test JSON format configuration."""
        configure_logging(level="INFO", format="json")
        assert len(logger._core.handlers) == 1

    def test_configures_structured_format(self):
        """Test structured format configuration."""
        configure_logging(level="INFO", format="structured")
        assert len(logger._core.handlers) == 1

    def test_configures_console_format(self):
        """Test console format configuration."""
        configure_logging(level="INFO", format="console")
        assert len(logger._core.handlers) == 1

    def test_configures_rich_format(self):
        """Test rich handler configuration."""
        configure_logging(level="INFO", format="rich")
        assert len(logger._core.handlers) == 1

    def test_configures_file_output(self, tmp_path: Path):
        """Test file output configuration."""
        log_file = tmp_path / "logs" / "gqlint.log"
        configure_logging(level="INFO", format="json", output_file=log_file)

        # Should have console + file handler
        assert len(logger._core.handlers) == 2

        get_logger("gqlint.file").info("Test message")
        assert log_file.exists()
        assert "Test message" in log_file.read_text()

    def test_idempotent_reconfiguration(self):
        """Test that configure_logging is idempotent with same config."""
        configure_logging(level="DEBUG", format="console")
        first = dict(logger._core.handlers)

        configure_logging(level="DEBUG", format="console")
        assert dict(logger._core.handlers) == first

    def test_force_reconfigure(self):
        """Test force_reconfigure parameter."""
        configure_logging(level="INFO", format="console")
        configure_logging(level="DEBUG", format="structured", force_reconfigure=True)

        assert len(logger._core.handlers) == 1
        assert logging_module._CURRENT_CONFIG["format"] == "structured"
        assert logging_module._CURRENT_CONFIG["level"] == "DEBUG"

    def test_keeps_external_handlers(self):
        """Test that reconfiguring never removes handlers it did not add."""
        external_id = logger.add(lambda message: None, level="DEBUG")
        configure_logging(level="INFO", format="console")
        configure_logging(level="ERROR", format="console")

        assert external_id in logger._core.handlers
        assert len(logger._core.handlers) == 2

    def test_env_defaults(self, monkeypatch):
        """Test lazy configuration from environment variables."""
        monkeypatch.setenv("GQLINT_LOG_LEVEL", "error")
        monkeypatch.setenv("GQLINT_LOG_FORMAT", "console")
        logging_module._ensure_configured()

        assert logging_module._CURRENT_CONFIG["level"] == "ERROR"
        assert logging_module._CURRENT_CONFIG["format"] == "console"
