"""Unit tests for logging configuration."""

import logging

import pytest

from investment_adjuster.utils.logging import get_logger, log_with_context, setup_logging


class TestLoggingSetup:
    """Test cases for logging setup."""

    def test_setup_logging_default_level(self) -> None:
        """Test setup_logging defaults to WARNING."""
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_debug_level(self) -> None:
        """Test setup_logging with DEBUG level."""
        setup_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_custom_format(self) -> None:
        """Test setup_logging accepts custom format without error."""
        setup_logging(level="INFO", log_format="%(levelname)s - %(message)s")
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_invalid_level_fallback(self) -> None:
        """Test setup_logging with invalid level falls back to WARNING."""
        setup_logging(level="INVALID")
        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_non_level_attribute(self) -> None:
        """Test names of non-level logging attributes fall back to WARNING."""
        setup_logging(level="basic_format")
        assert logging.getLogger().level == logging.WARNING


class TestGetLogger:
    """Test cases for get_logger function."""

    def test_get_logger_name(self) -> None:
        """Test get_logger creates logger with correct name."""
        logger = get_logger("investment_adjuster.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "investment_adjuster.test"

    def test_get_logger_same_instance(self) -> None:
        """Test get_logger returns same instance for same name."""
        assert get_logger("test_same") is get_logger("test_same")


class TestLogWithContext:
    """Test cases for log_with_context function."""

    def test_log_with_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test logging message with context."""
        logger = get_logger("test_context")

        with caplog.at_level(logging.INFO, logger="test_context"):
            log_with_context(logger, "info", "Allocations adjusted", account="X1", total=100)

        assert len(caplog.records) == 1
        assert caplog.records[0].message == "Allocations adjusted | account=X1 total=100"

    def test_log_with_context_no_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test logging message without context fields."""
        logger = get_logger("test_no_context")

        with caplog.at_level(logging.INFO, logger="test_no_context"):
            log_with_context(logger, "info", "Simple message")

        assert caplog.records[0].message == "Simple message"

    def test_log_with_context_respects_level(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test debug context messages are dropped at INFO."""
        logger = get_logger("test_level_context")

        with caplog.at_level(logging.INFO, logger="test_level_context"):
            log_with_context(logger, "debug", "Hidden", key="value")

        assert caplog.records == []
