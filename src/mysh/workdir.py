"""Working-directory tracking.

The shell keeps its own record of the current directory.  Reads go
through the tracked value; the OS working directory is consulted only
right after a successful change, because symlinks and ``..`` segments
can make the real directory differ textually from the path the user
typed.

A failed change leaves the tracked value exactly as it was.
"""

import os

from mysh.logging import Logger, LogLevel
from mysh.outcome import CommandResult, Outcome


class WorkingDirectory:
    """The shell's tracked working directory."""

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Start tracking the process's current directory.

        Args:
            logger: Optional event log for directory changes.

        """
        self._current = os.getcwd()
        self._logger = logger

    @property
    def current(self) -> str:
        """Return the tracked absolute path."""
        return self._current

    def change(self, target: str) -> CommandResult:
        """Change to *target* and re-read the real directory on success.

        Relative targets are resolved by the OS against the process's
        actual working directory.

        Args:
            target: Absolute or relative directory path.

        Returns:
            SUCCESS, or DIRECTORY_NOT_FOUND if the OS refused the change.

        """
        try:
            os.chdir(target)
        except (OSError, ValueError) as e:
            # ValueError: the path holds a NUL byte.
            reason = e.strerror if isinstance(e, OSError) else e
            self._log(LogLevel.WARNING, f"cannot change to {target!r}: {reason}")
            return CommandResult(Outcome.DIRECTORY_NOT_FOUND)
        self._current = os.getcwd()
        self._log(LogLevel.INFO, f"moved to {self._current}")
        return CommandResult(Outcome.SUCCESS)

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="workdir")
