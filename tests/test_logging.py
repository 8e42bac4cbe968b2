"""Tests for the shell event log.

The logger records structured entries for what the shell does: spawned
children, delivered signals, and dispatched commands.
"""

import pytest

from mysh.logging import LogEntry, Logger, LogLevel
from mysh.outcome import Outcome
from mysh.shell import Shell


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str(self) -> None:
        """String representation includes level, source, and message."""
        entry = LogEntry(level=LogLevel.WARNING, message="no such process", source="supervisor")
        assert str(entry) == "[WARNING] supervisor: no such process"


class TestLogger:
    """Verify the bounded logger."""

    def test_log_appends_in_order(self) -> None:
        """Entries are kept in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="a")
        logger.log(LogLevel.ERROR, "second", source="b")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_filter_by_level(self) -> None:
        """min_level keeps entries at or above the level."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "d", source="a")
        logger.log(LogLevel.WARNING, "w", source="a")
        logger.log(LogLevel.ERROR, "e", source="a")
        assert [e.message for e in logger.filter(min_level=LogLevel.WARNING)] == ["w", "e"]

    def test_filter_returns_copy(self) -> None:
        """Changing a filtered result leaves the log alone."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="a")
        logger.filter(min_level=LogLevel.DEBUG).clear()
        assert len(logger) == 1

    def test_unbounded_by_default(self) -> None:
        """Without a capacity nothing is dropped."""
        logger = Logger()
        for i in range(50):
            logger.log(LogLevel.DEBUG, str(i), source="a")
        assert logger.max_entries is None
        assert len(logger) == 50

    def test_ring_buffer_drops_oldest(self) -> None:
        """A full log evicts its oldest entry first."""
        logger = Logger(max_entries=3)
        for message in ["a", "b", "c", "d"]:
            logger.log(LogLevel.INFO, message, source="a")
        assert [e.message for e in logger.entries] == ["b", "c", "d"]

    def test_capacity_must_be_positive(self) -> None:
        """A zero capacity is refused."""
        with pytest.raises(ValueError, match="max_entries"):
            Logger(max_entries=0)

    def test_clear(self) -> None:
        """Clearing removes every entry."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="a")
        logger.clear()
        assert logger.entries == []


class TestLogCommand:
    """Verify the ``log`` command through the shell."""

    def test_unknown_command_is_logged(self) -> None:
        """An unknown keyword leaves a warning naming it."""
        shell = Shell()
        shell.execute("frobnicate")
        result = shell.execute("log")
        assert "[WARNING] shell: unknown command 'frobnicate'" in result

    def test_log_clear(self) -> None:
        """``log -c`` clears the log before printing it."""
        shell = Shell()
        shell.execute("frobnicate")
        assert shell.execute("log -c") == ""
        assert shell.logger.entries == []

    def test_shell_shares_logger(self) -> None:
        """A logger passed in is the one the shell writes to."""
        logger = Logger()
        shell = Shell(logger=logger)
        shell.execute("nope")
        assert shell.logger is logger
        assert any(e.source == "shell" for e in logger.entries)

    def test_log_warnings_only(self) -> None:
        """``log -w`` hides DEBUG and INFO entries."""
        shell = Shell()
        shell.execute("whereami")
        shell.execute("frobnicate")
        result = shell.execute("log -w")
        assert "unknown command 'frobnicate'" in result
        assert "[DEBUG]" not in result
        assert "[INFO]" not in result

    def test_log_rejects_other_flags(self) -> None:
        """Only ``-c`` and ``-w`` are accepted."""
        shell = Shell()
        shell.execute("log -x")
        assert shell.last_outcome is Outcome.INVALID_PARAMETERS

    def test_default_log_is_bounded(self) -> None:
        """The shell's own log keeps only recent entries."""
        shell = Shell()
        limit = shell.logger.max_entries
        assert limit is not None
        for _ in range(limit + 10):
            shell.execute("whereami")
        assert len(shell.logger) == limit
