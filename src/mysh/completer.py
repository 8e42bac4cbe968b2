"""Context-aware tab completer for the shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import os
import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mysh.shell import Shell

# Commands whose argument is a directory.
_DIRECTORY_COMMANDS: frozenset[str] = frozenset(["movetodir"])

# Commands whose argument is a tracked PID.
_PID_COMMANDS: frozenset[str] = frozenset(["exterminate"])


class Completer:
    """Context-aware tab completer for the shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose keywords, working directory, and
                   background jobs are used to generate candidates.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → keyword completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

        cmd = words[0]
        if cmd in _DIRECTORY_COMMANDS:
            return self._complete_directories(text)
        if cmd in _PID_COMMANDS:
            return sorted(
                str(job.pid) for job in self._shell.supervisor.jobs if str(job.pid).startswith(text)
            )
        return []

    def _complete_directories(self, text: str) -> list[str]:
        """Complete directory names, relative to the tracked directory.

        Split the partial path into a directory and a name prefix, list
        the directory, and keep sub-directories matching the prefix.
        Candidates get a trailing ``/``.
        """
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        base = os.path.join(self._shell.workdir.current, directory)
        try:
            entries = os.listdir(base)
        except OSError:
            return []

        return sorted(
            f"{directory}{entry}/"
            for entry in entries
            if entry.startswith(prefix) and os.path.isdir(os.path.join(base, entry))
        )
