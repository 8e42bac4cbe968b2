"""Command registry and parameter validation.

A command is plain data: a keyword, a parameter rule, and a handler.
The registry is a flat, ordered table — no class per command.

Parameter rules:
    - **Allow-list** — a frozenset of accepted parameter strings.  Every
      supplied parameter must be in the set, and there may be no more
      parameters than the set has members.  An empty set means "no
      parameters".
    - **Any** — ``allowed=None`` accepts arbitrary parameters.  Used by
      process-launching and path commands, whose handlers check arity
      themselves.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

from mysh.outcome import CommandResult

# Type alias for a command handler: takes the parameters, returns a result.
Handler: TypeAlias = Callable[[list[str]], CommandResult]

ANY_PARAMETERS = None
"""Parameter rule that accepts anything."""


class DuplicateCommandError(ValueError):
    """Two commands were registered with the same keyword."""


@dataclass(frozen=True)
class Command:
    """A registered shell command.

    Attributes:
        keyword: The first word that selects this command.
        handler: Called with the parameters once they validate.
        allowed: Accepted parameter strings, or None for any.
        summary: One-line description shown by ``help``.

    """

    keyword: str
    handler: Handler
    allowed: frozenset[str] | None = frozenset()
    summary: str = ""

    def accepts(self, params: list[str]) -> bool:
        """Return True if *params* satisfy this command's rule."""
        if self.allowed is None:
            return True
        return len(params) <= len(self.allowed) and all(p in self.allowed for p in params)


class CommandRegistry:
    """Ordered table of commands, looked up by keyword."""

    def __init__(self) -> None:
        """Create an empty registry."""
        self._commands: dict[str, Command] = {}

    def __len__(self) -> int:
        """Return the number of registered commands."""
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        """Iterate over commands in registration order."""
        return iter(self._commands.values())

    def register(self, command: Command) -> None:
        """Add *command* to the table.

        Raises:
            DuplicateCommandError: If the keyword is already registered.

        """
        if command.keyword in self._commands:
            msg = f"Command {command.keyword!r} is already registered"
            raise DuplicateCommandError(msg)
        self._commands[command.keyword] = command

    def lookup(self, keyword: str) -> Command | None:
        """Return the command registered under *keyword*, or None."""
        return self._commands.get(keyword)

    @property
    def keywords(self) -> list[str]:
        """Return registered keywords in registration order."""
        return list(self._commands)
