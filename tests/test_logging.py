"""
Tests for structured logging configuration.
"""

import json
import logging

import pytest
import structlog

from typed_cache.config import BackendSettings
from typed_cache.factory import setup_logging
from typed_cache.logging import clear_context, configure_logging, get_logger, set_request_id


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    clear_context()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def configured_logging(restore_logging):
    configure_logging("debug")


def _last_record(caplog, logger_name: str):
    messages = [record.getMessage() for record in caplog.records if record.name == logger_name]
    return json.loads(messages[-1])


class TestLogging:
    """Test cases for logging configuration."""

    def test_json_records_carry_context(self, configured_logging, caplog):
        """Test records are JSON with component and correlation ID."""
        set_request_id("req-123")

        get_logger("typed_cache.cache").info("Writing cache", cache_key="orders:42")

        record = _last_record(caplog, "typed_cache.cache")
        assert record["event"] == "Writing cache"
        assert record["cache_key"] == "orders:42"
        assert record["level"] == "info"
        assert record["logger"] == "typed_cache.cache"
        assert record["component"] == "cache"
        assert record["request_id"] == "req-123"

    def test_request_id_generated(self):
        """Test a request ID is generated when none is given."""
        request_id = set_request_id()
        try:
            assert len(request_id) == 36
        finally:
            clear_context()

    def test_cleared_context_omits_request_id(self, configured_logging, caplog):
        """Test no request ID is logged after clearing."""
        set_request_id("req-1")
        clear_context()

        get_logger("typed_cache.redis").warning("Redis unavailable")

        record = _last_record(caplog, "typed_cache.redis")
        assert "request_id" not in record
        assert record["component"] == "redis"

    @pytest.fixture
    def warning_logging(self, restore_logging):
        setup_logging(BackendSettings(log_level="warning"))

    def test_setup_logging_uses_settings_level(self, warning_logging, caplog):
        """Test the configured level filters records."""
        logger = get_logger("typed_cache.backend_level")
        logger.info("Dropped")
        logger.warning("Kept")

        events = [
            json.loads(record.getMessage())["event"]
            for record in caplog.records
            if record.name == "typed_cache.backend_level"
        ]
        assert events == ["Kept"]
        assert logging.getLogger().level == logging.WARNING
