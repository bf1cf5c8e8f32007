"""Tests for the shell event log.

The logger records structured entries for interpreter events and can
echo them to a stream as they happen.
"""

import io

import pytest

from myshell.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering and parsing."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR

    def test_parse_is_case_insensitive(self) -> None:
        """Level names parse regardless of case."""
        assert LogLevel.parse("debug") is LogLevel.DEBUG
        assert LogLevel.parse(" Warning ") is LogLevel.WARNING

    def test_parse_unknown(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="unknown log level"):
            LogLevel.parse("loud")


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, source, and pid."""
        entry = LogEntry(level=LogLevel.INFO, message="forked", source="launcher", pid=42)
        assert entry.level is LogLevel.INFO
        assert entry.message == "forked"
        assert entry.source == "launcher"
        assert entry.pid == 42

    def test_pid_defaults_to_shell(self) -> None:
        """Entries about the shell itself carry pid 0."""
        assert LogEntry(level=LogLevel.INFO, message="m", source="shell").pid == 0

    def test_entry_str(self) -> None:
        """String representation is ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.WARNING, message="disk full", source="shell")
        assert str(entry) == "[WARNING] shell: disk full"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable."""
        logger = Logger()
        logger.log(LogLevel.INFO, "started", source="repl")
        assert len(logger.entries) == 1
        assert logger.entries[0].message == "started"

    def test_entries_are_ordered(self) -> None:
        """Entries should be in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list does not affect the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="test")
        logger.entries.clear()
        assert len(logger.entries) == 1

    def test_capacity_drops_oldest(self) -> None:
        """Once full, the oldest entries fall off."""
        logger = Logger(capacity=2)
        for message in ("a", "b", "c"):
            logger.log(LogLevel.INFO, message, source="test")
        assert [e.message for e in logger.entries] == ["b", "c"]

    def test_invalid_capacity(self) -> None:
        """A logger must keep at least one entry."""
        with pytest.raises(ValueError, match="positive"):
            Logger(capacity=0)


class TestEcho:
    """Verify echoing entries to a stream."""

    def test_echo_at_or_above_level(self) -> None:
        """Entries at or above echo_level are written to the stream."""
        stream = io.StringIO()
        logger = Logger(echo=stream, echo_level=LogLevel.INFO)
        logger.log(LogLevel.DEBUG, "hidden", source="test")
        logger.log(LogLevel.INFO, "shown", source="test")
        assert stream.getvalue() == "[INFO] test: shown\n"

    def test_no_echo_without_level(self) -> None:
        """A stream alone does not enable echo."""
        stream = io.StringIO()
        logger = Logger(echo=stream)
        logger.log(LogLevel.ERROR, "quiet", source="test")
        assert stream.getvalue() == ""
        assert len(logger.entries) == 1
