"""Shell event log.

The logger records structured entries for what the shell does on the
user's behalf: spawned children, delivered signals, refused directory
changes, and dispatched commands.  The ``log`` command shows it, and
``log -w`` narrows it to warnings and errors.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — a bounded ring buffer of entries with level filtering.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records are never edited.
    - **Ring buffer** — a long session dispatches a DEBUG entry per
      command, so the oldest entries are dropped once ``max_entries``
      is reached.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "supervisor").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded, chronological log buffer."""

    def __init__(self, *, max_entries: int | None = None) -> None:
        """Create an empty logger.

        Args:
            max_entries: Keep at most this many entries, dropping the
                oldest first.  None keeps everything.

        """
        if max_entries is not None and max_entries <= 0:
            msg = f"max_entries must be positive, got {max_entries}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int | None:
        """Return the capacity, or None if unbounded."""
        return self._entries.maxlen

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def __len__(self) -> int:
        """Return the number of entries held."""
        return len(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry, evicting the oldest if the log is full.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(self, *, min_level: LogLevel) -> list[LogEntry]:
        """Return the entries at or above *min_level*, oldest first."""
        return [e for e in self._entries if e.level >= min_level]

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
