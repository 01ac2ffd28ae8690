"""
Tests for logging configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from geopoint.core.crs.registry import ProjectionRegistry
from geopoint.core.logging_config import (
    ColoredFormatter,
    JSONFormatter,
    get_log_level,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep handler changes from leaking into other tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_log_level(self):
        """Test log level name conversion."""
        assert get_log_level("DEBUG") == logging.DEBUG
        assert get_log_level("INFO") == logging.INFO
        assert get_log_level("WARNING") == logging.WARNING
        assert get_log_level("ERROR") == logging.ERROR
        assert get_log_level("CRITICAL") == logging.CRITICAL
        assert get_log_level("invalid") == logging.INFO

    def test_get_log_level_case_insensitive(self):
        """Test log level is case insensitive."""
        assert get_log_level("debug") == logging.DEBUG
        assert get_log_level("DeBuG") == logging.DEBUG

    def test_setup_logging_console_only(self):
        """Test logging setup with console handler only."""
        setup_logging(log_level="DEBUG", enable_console=True)

        logger = logging.getLogger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_setup_logging_quiets_pyproj(self):
        """Test the pyproj logger is limited to warnings."""
        setup_logging(log_level="DEBUG")
        assert logging.getLogger("pyproj").level == logging.WARNING

    def test_setup_logging_json_file(self, tmp_path: Path):
        """Test JSON records are written to the log file."""
        log_file = tmp_path / "logs" / "geopoint.log"
        setup_logging(log_level="INFO", log_file=log_file, json_logs=True, enable_console=False)

        get_logger("geopoint.test").info("hello", extra={"nickname": "wgs84"})
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        record = json.loads(lines[-1])
        assert record["message"] == "hello"
        assert record["nickname"] == "wgs84"

    def test_registry_logs_registration(self, caplog: pytest.LogCaptureFixture):
        """Test registering a projection is logged."""
        registry = ProjectionRegistry()
        with caplog.at_level(logging.INFO, logger="geopoint.core.crs.registry"):
            registry.register("wgs84", "+proj=latlong +datum=WGS84")

        assert "Registered projection wgs84" in caplog.text


class TestFormatters:
    """Tests for log formatters."""

    def _record(self, msg: str = "Test message") -> logging.LogRecord:
        return logging.LogRecord(
            name="test.module",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg=msg,
            args=(),
            exc_info=None,
        )

    def test_json_formatter_basic(self):
        """Test JSON formatter with basic record."""
        data = json.loads(JSONFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.module"
        assert data["message"] == "Test message"
        assert data["line"] == 42

    def test_json_formatter_with_extra_fields(self):
        """Test extra fields are copied."""
        record = self._record()
        record.zone = 31

        data = json.loads(JSONFormatter().format(record))
        assert data["zone"] == 31

    def test_colored_formatter_restores_levelname(self):
        """Test the level name is not left colored."""
        record = self._record()
        formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[32m" in formatted
        assert record.levelname == "INFO"
