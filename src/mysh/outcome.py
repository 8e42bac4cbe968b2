"""Outcome codes — the closed result type of every shell command.

Every command handler returns exactly one ``CommandResult``.  The
result pairs an ``Outcome`` (what happened) with any output the command
produced (a history listing, a list of PIDs, ...).  The shell is the
only place that turns outcomes into user-visible text, using the
``MESSAGES`` table below.

Design choices:
    - **StrEnum** so outcomes print and compare as readable strings.
    - **Data-driven messages** — the ``MESSAGES`` table replaces a
      chain of if/elif in the dispatcher, and SUCCESS simply has no
      entry.
    - **EXIT_REQUESTED is a control signal, not an error** — it tells
      the shell to stop the session.
"""

from dataclasses import dataclass
from enum import StrEnum


class Outcome(StrEnum):
    """Result of executing one command."""

    SUCCESS = "success"
    COMMAND_NOT_FOUND = "command-not-found"
    INVALID_PARAMETERS = "invalid-parameters"
    DIRECTORY_NOT_FOUND = "directory-not-found"
    CHILD_PROCESS_ERROR = "child-process-error"
    COULD_NOT_TERMINATE = "could-not-terminate"
    EXIT_REQUESTED = "exit-requested"


MESSAGES: dict[Outcome, str] = {
    Outcome.COMMAND_NOT_FOUND: "Command was not found",
    Outcome.INVALID_PARAMETERS: "Invalid parameters",
    Outcome.DIRECTORY_NOT_FOUND: "Directory was not found",
    Outcome.CHILD_PROCESS_ERROR: "Child process error",
    Outcome.COULD_NOT_TERMINATE: "Could not terminate process",
}
"""Map each failure outcome to its user-facing message.

SUCCESS and EXIT_REQUESTED carry no message.
"""


@dataclass(frozen=True)
class CommandResult:
    """The outcome of a command plus whatever text it produced.

    Attributes:
        outcome: What happened.
        output: Command-specific output (may be empty).

    """

    outcome: Outcome
    output: str = ""

    def message(self) -> str:
        """Return the user-facing message for the outcome, or ``""``."""
        return MESSAGES.get(self.outcome, "")
