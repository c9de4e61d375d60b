"""Tests for logging system."""

import os
import time
import logging
from pathlib import Path
from datetime import datetime

from greenlight.utils.logging import setup_logging, get_logger, cleanup_old_logs


class TestLogging:
    """Test logging functionality."""

    def test_setup_logging_default(self, temp_dir):
        """Test setting up logging with default parameters."""
        log_file = temp_dir / "test.log"
        logger = setup_logging(log_file=log_file, level="INFO")

        assert logger.name == "greenlight"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.FileHandler)

    def test_setup_logging_with_console(self, temp_dir):
        """Test setting up logging with console output."""
        log_file = temp_dir / "test.log"
        logger = setup_logging(log_file=log_file, level="DEBUG", console_output=True)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        handler_types = [type(h).__name__ for h in logger.handlers]
        assert 'FileHandler' in handler_types
        assert 'StreamHandler' in handler_types

    def test_log_levels(self, temp_dir):
        """Test different log levels."""
        log_file = temp_dir / "test.log"
        logger = setup_logging(log_file=log_file, level="WARNING")

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")

        with open(log_file, 'r', encoding='utf-8') as f:
            content = f.read()

        # Only WARNING and ERROR should be logged
        assert "Debug message" not in content
        assert "Info message" not in content
        assert "Warning message" in content
        assert "Error message" in content

    def test_child_logger_writes_to_file(self, temp_dir):
        """Test module loggers share the package handlers."""
        log_file = temp_dir / "test.log"
        setup_logging(log_file=log_file, level="DEBUG")

        get_logger("development.history").warning("History unavailable")

        content = log_file.read_text(encoding='utf-8')
        assert "greenlight.development.history" in content
        assert "History unavailable" in content

    def test_default_log_location(self, monkeypatch, temp_dir):
        """Test default log file location."""
        monkeypatch.setattr(Path, 'home', lambda: temp_dir)

        logger = setup_logging()
        logger.info("Test message")

        timestamp = datetime.now().strftime("%Y%m%d")
        expected_log = temp_dir / ".greenlight" / "logs" / f"greenlight_{timestamp}.log"
        assert expected_log.exists()

    def test_log_format(self, temp_dir):
        """Test log message format."""
        log_file = temp_dir / "test.log"
        logger = setup_logging(log_file=log_file)

        logger.info("Test message")

        with open(log_file, 'r', encoding='utf-8') as f:
            content = f.read()

        assert "INFO" in content
        assert "Test message" in content
        assert "greenlight" in content
        assert datetime.now().strftime("%Y-%m-%d") in content

    def test_get_logger(self):
        """Test getting logger instances."""
        logger1 = get_logger()
        assert logger1.name == "greenlight"

        logger2 = get_logger("analysis")
        assert logger2.name == "greenlight.analysis"

        # Same name should return same instance
        assert get_logger("analysis") is logger2

    def test_get_logger_writes_no_files(self, monkeypatch, temp_dir):
        """Test an unconfigured package logger only gets a NullHandler."""
        monkeypatch.setattr(Path, 'home', lambda: temp_dir)
        package_logger = logging.getLogger("greenlight")
        for handler in list(package_logger.handlers):
            handler.close()
        package_logger.handlers.clear()

        get_logger("catalog").warning("Catalog override missing")

        assert [type(h) for h in package_logger.handlers] == [logging.NullHandler]
        assert not (temp_dir / ".greenlight").exists()

    def test_logger_startup_message(self, temp_dir):
        """Test that startup message is logged."""
        log_file = temp_dir / "test.log"
        setup_logging(log_file=log_file, level="INFO")

        with open(log_file, 'r', encoding='utf-8') as f:
            content = f.read()

        assert "GreenlightIQ logging started" in content
        assert "Level: INFO" in content
        assert str(log_file) in content
        assert "=" * 60 in content

    def test_exception_logging(self, temp_dir):
        """Test logging exceptions with traceback."""
        log_file = temp_dir / "test.log"
        logger = setup_logging(log_file=log_file)

        try:
            raise ValueError("Test exception")
        except ValueError:
            logger.error("Error occurred", exc_info=True)

        with open(log_file, 'r', encoding='utf-8') as f:
            content = f.read()

        assert "Error occurred" in content
        assert "ValueError: Test exception" in content
        assert "Traceback" in content

    def test_multiple_setup_calls(self, temp_dir):
        """Test that multiple setup calls clear existing handlers."""
        log_file1 = temp_dir / "test1.log"
        log_file2 = temp_dir / "test2.log"

        logger = setup_logging(log_file=log_file1)
        initial_handlers = len(logger.handlers)

        logger = setup_logging(log_file=log_file2)
        assert len(logger.handlers) == initial_handlers

        logger.info("Test message")
        with open(log_file2, 'r', encoding='utf-8') as f:
            content = f.read()
        assert "Test message" in content


class TestLogCleanup:
    """Test old log removal."""

    def test_removes_only_old_logs(self, temp_dir):
        """Test logs older than the cutoff are deleted."""
        old_log = temp_dir / "old.log"
        new_log = temp_dir / "new.log"
        other = temp_dir / "notes.txt"
        for path in (old_log, new_log, other):
            path.write_text("x")

        two_days_ago = time.time() - 2 * 24 * 3600
        os.utime(old_log, (two_days_ago, two_days_ago))
        os.utime(other, (two_days_ago, two_days_ago))

        assert cleanup_old_logs(temp_dir, days_to_keep=1) == 1
        assert not old_log.exists()
        assert new_log.exists()
        assert other.exists()

    def test_missing_directory(self, temp_dir):
        """Test a missing log directory deletes nothing."""
        assert cleanup_old_logs(temp_dir / "missing") == 0
