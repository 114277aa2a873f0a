"""Tests for logging configuration."""

import pytest

import logging

import src.helpers.logging as logging_helpers
from src.helpers.logging import configure_logging, get_logger, parse_log_level


@pytest.fixture
def restore_defaults():
    """Put the logging defaults back after a test changes them."""
    level, color = logging_helpers.default_level, logging_helpers.default_color
    yield
    logging_helpers.default_level = level
    logging_helpers.default_color = color


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test_module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_module"

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        """Test that getting logger with same name returns same instance."""
        logger1 = get_logger("test_same")
        logger2 = get_logger("test_same")

        assert logger1 is logger2

    def test_get_logger_with_debug_level(self) -> None:
        """Test get_logger with DEBUG level."""
        logger = get_logger("test_debug", log_level="DEBUG")

        assert logger.level == logging.DEBUG

    def test_get_logger_warn_alias(self) -> None:
        """Test WARN is accepted as WARNING."""
        logger = get_logger("test_warn_alias", log_level="WARN")

        assert logger.level == logging.WARNING

    def test_get_logger_default_level(self) -> None:
        """Test get_logger with default level."""
        logger = get_logger("test_default")

        assert logger.level == logging.INFO

    def test_get_logger_invalid_level_raises(self) -> None:
        """Test that invalid log level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("test_invalid", log_level="INVALID")

    def test_get_logger_invalid_handler_raises(self) -> None:
        """Test that invalid handler raises ValueError."""
        with pytest.raises(ValueError, match="Invalid handler"):
            get_logger("test_invalid_handler", log_handler="file")

    def test_get_logger_with_color(self) -> None:
        """Test colored logger gets a colorlog formatter."""
        import colorlog

        logger = get_logger("test_color", log_color=True)

        assert isinstance(logger.handlers[-1].formatter, colorlog.ColoredFormatter)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.usefixtures("restore_defaults")
    def test_relevels_existing_loggers(self) -> None:
        """Test existing loggers follow the configured level."""
        logger = get_logger("test_relevel", log_level="INFO")

        configure_logging("ERROR")

        assert logger.level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)
        configure_logging("INFO")

    @pytest.mark.usefixtures("restore_defaults")
    def test_sets_default_for_new_loggers(self) -> None:
        """Test loggers created later use the configured default."""
        configure_logging("DEBUG")

        logger = get_logger("test_new_default")

        assert logger.level == logging.DEBUG
        configure_logging("INFO")

    def test_invalid_level(self) -> None:
        """Test configure_logging validates the level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("CHATTY")


def test_parse_log_level_is_case_insensitive() -> None:
    """Test level names are matched case-insensitively."""
    assert parse_log_level("debug") == logging.DEBUG
    assert parse_log_level("Error") == logging.ERROR
