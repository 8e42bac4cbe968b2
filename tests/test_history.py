"""Tests for command history.

The shell records every line exactly as typed, including blank lines
and the ``history`` command's own invocation.
"""

import pytest

from mysh.history import HISTORY_INDENT, HistoryTracker
from mysh.shell import Shell


class TestHistoryTracker:
    """Verify the tracker on its own."""

    def test_starts_empty(self) -> None:
        """A new tracker has nothing to render."""
        history = HistoryTracker()
        assert len(history) == 0
        assert history.render() == ""

    def test_preserves_order_including_blanks(self) -> None:
        """Entries come back in arrival order, blank lines included."""
        history = HistoryTracker()
        for line in ("whereami", "", "run ls", "   "):
            history.record(line)
        assert history.entries == ["whereami", "", "run ls", "   "]

    def test_render_indents_each_entry(self) -> None:
        """Every rendered line starts with the indent marker."""
        history = HistoryTracker()
        history.record("a")
        history.record("b")
        assert history.render() == f"{HISTORY_INDENT}a\n{HISTORY_INDENT}b"

    def test_clear_empties(self) -> None:
        """Clearing leaves no entry behind."""
        history = HistoryTracker()
        history.record("a")
        history.clear()
        assert history.entries == []

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list does not touch the tracker."""
        history = HistoryTracker()
        history.record("a")
        history.entries.append("b")
        assert history.entries == ["a"]

    def test_max_entries_drops_oldest(self) -> None:
        """A capped tracker keeps only the newest lines."""
        history = HistoryTracker(max_entries=2)
        for line in ("one", "two", "three"):
            history.record(line)
        assert history.entries == ["two", "three"]

    def test_max_entries_must_be_positive(self) -> None:
        """A zero cap is rejected."""
        with pytest.raises(ValueError, match="positive"):
            HistoryTracker(max_entries=0)


class TestHistoryCommand:
    """Verify the ``history`` command through the shell."""

    def test_history_records_itself(self) -> None:
        """The first history call should show itself."""
        shell = Shell()
        assert shell.execute("history") == f"{HISTORY_INDENT}history"

    def test_history_preserves_order(self) -> None:
        """Commands should appear in chronological order."""
        shell = Shell()
        shell.execute("whereami")
        shell.execute("")
        shell.execute("bogus")
        lines = shell.execute("history").splitlines()
        assert lines == [f"{HISTORY_INDENT}{e}" for e in ("whereami", "", "bogus", "history")]

    def test_clear_prints_nothing(self) -> None:
        """``history -c`` clears before printing, so it prints nothing."""
        shell = Shell()
        shell.execute("whereami")
        assert shell.execute("history -c") == ""
        assert shell.history.entries == []

    def test_history_after_clear_shows_only_itself(self) -> None:
        """Nothing recorded before the clear survives it."""
        shell = Shell()
        shell.execute("whereami")
        shell.execute("history -c")
        assert shell.execute("history") == f"{HISTORY_INDENT}history"

    def test_invalid_flag(self) -> None:
        """An unknown flag is rejected without touching history."""
        shell = Shell()
        shell.execute("whereami")
        result = shell.execute("history -x")
        assert "Invalid parameters" in result
        assert shell.history.entries == ["whereami", "history -x"]
