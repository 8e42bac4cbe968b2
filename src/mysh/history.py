"""Command history — an append-only log of raw input lines.

Every line the user types is recorded exactly as typed, including
blank lines and the ``history`` command's own invocation.  History
lives only for the session; nothing is written to disk.
"""

HISTORY_INDENT = "  "
"""Leading marker printed before every history entry."""


class HistoryTracker:
    """Record input lines in arrival order.

    The log is unbounded by default.  Callers that need bounded memory
    can pass ``max_entries``; once the cap is reached the oldest entry
    is dropped for each new one.
    """

    def __init__(self, *, max_entries: int | None = None) -> None:
        """Create an empty history.

        Args:
            max_entries: Optional cap on the number of stored lines.

        Raises:
            ValueError: If *max_entries* is not positive.

        """
        if max_entries is not None and max_entries <= 0:
            msg = f"max_entries must be positive, got {max_entries}"
            raise ValueError(msg)
        self._entries: list[str] = []
        self._max_entries = max_entries

    def __len__(self) -> int:
        """Return the number of recorded lines."""
        return len(self._entries)

    @property
    def entries(self) -> list[str]:
        """Return a copy of the recorded lines, oldest first."""
        return list(self._entries)

    def record(self, line: str) -> None:
        """Append *line* unconditionally."""
        self._entries.append(line)
        if self._max_entries is not None and len(self._entries) > self._max_entries:
            del self._entries[0]

    def clear(self) -> None:
        """Forget every recorded line."""
        self._entries.clear()

    def render(self) -> str:
        """Return the history, one indented entry per line."""
        return "\n".join(f"{HISTORY_INDENT}{entry}" for entry in self._entries)
