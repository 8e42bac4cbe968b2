"""The shell — command interpreter and dispatcher.

The shell reads one line at a time, splits it into a keyword and
parameters, looks the keyword up in its command registry, validates the
parameters, and runs the command.  Every command returns a
``CommandResult``; the shell is the single place that turns outcomes
into messages and decides whether the session goes on.

Design choices:
    - **Returns strings, not prints.**  This keeps the shell fully
      testable and separates concerns (the REPL decides how to display
      output).  Foreground children still write straight to the
      terminal.
    - **Commands are data.**  Each command is a ``Command`` entry in a
      flat registry.  Adding one means writing a handler method and
      registering it — no cascading if/elif chains.
    - **Collaborators are explicit.**  History, the working directory,
      and the process supervisor are objects the shell holds, and the
      exit flow calls ``supervisor.terminate_all()`` directly.
    - **Confirmation is injected.**  ``byebye`` asks through the
      ``confirm`` callable (``input`` by default) so tests can answer.
"""

from collections.abc import Callable

from mysh.commands import ANY_PARAMETERS, Command, CommandRegistry
from mysh.history import HistoryTracker
from mysh.logging import Logger, LogLevel
from mysh.outcome import CommandResult, Outcome
from mysh.supervisor import ProcessSupervisor
from mysh.tokenizer import NO_COMMAND, tokenize
from mysh.workdir import WorkingDirectory

# Largest PID accepted by ``exterminate``.  PIDs 0 and below address
# whole process groups, so they are rejected as well.
_MAX_PID = 2**31 - 1

# Entries the default event log keeps before dropping the oldest.
_LOG_LIMIT = 1000

_CLEAR_FLAG = "-c"
_WARNINGS_FLAG = "-w"
_YES = frozenset(["y", "yes"])
_NO = frozenset(["n", "no"])


def _parse_positive(token: str, *, limit: int | None = None) -> int | None:
    """Return *token* as a positive int, or None if it is not one."""
    # int() would also take "+3", " 3" and "1_0".
    if not token.isdecimal():
        return None
    value = int(token)
    if value <= 0 or (limit is not None and value > limit):
        return None
    return value


class Shell:
    """Command interpreter for a single interactive user."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        confirm: Callable[[str], str] = input,
        logger: Logger | None = None,
        supervisor: ProcessSupervisor | None = None,
        workdir: WorkingDirectory | None = None,
        history: HistoryTracker | None = None,
    ) -> None:
        """Create a shell with its collaborators.

        Args:
            confirm: Asks the user a question and returns the answer.
            logger: Event log shared with the collaborators (bounded to
                the most recent entries by default).
            supervisor: Process supervisor (a fresh one by default).
            workdir: Working-directory tracker (starts at the OS cwd).
            history: History tracker (unbounded by default).

        """
        self._confirm = confirm
        self._logger = logger if logger is not None else Logger(max_entries=_LOG_LIMIT)
        if supervisor is None:
            supervisor = ProcessSupervisor(logger=self._logger)
        if workdir is None:
            workdir = WorkingDirectory(logger=self._logger)
        self._supervisor = supervisor
        self._workdir = workdir
        self._history = history if history is not None else HistoryTracker()
        self._last_outcome = Outcome.SUCCESS
        self._last_output = ""

        self._registry = CommandRegistry()
        for command in self._builtin_commands():
            self._registry.register(command)

    def _builtin_commands(self) -> list[Command]:
        """Return the commands in the order ``help`` lists them."""
        clear = frozenset([_CLEAR_FLAG])
        return [
            Command("history", self._cmd_history, clear, "show input history (-c clears it)"),
            Command("byebye", self._cmd_byebye, summary="leave the shell"),
            Command("whereami", self._cmd_whereami, summary="show the current directory"),
            Command("movetodir", self._cmd_movetodir, ANY_PARAMETERS, "change directory"),
            Command("run", self._cmd_run, ANY_PARAMETERS, "run a program and wait for it"),
            Command("start", self._cmd_run, ANY_PARAMETERS, "same as run"),
            Command("background", self._cmd_background, ANY_PARAMETERS, "run without waiting"),
            Command("exterminate", self._cmd_exterminate, ANY_PARAMETERS, "terminate a process"),
            Command(
                "exterminateall", self._cmd_exterminateall, summary="terminate all background jobs"
            ),
            Command("repeat", self._cmd_repeat, ANY_PARAMETERS, "background a program n times"),
            Command("help", self._cmd_help, summary="list commands"),
            Command(
                "log",
                self._cmd_log,
                frozenset([_CLEAR_FLAG, _WARNINGS_FLAG]),
                "show the event log (-c clears it, -w warnings only)",
            ),
        ]

    # -- public API --------------------------------------------------------

    @property
    def command_names(self) -> list[str]:
        """Return registered keywords in registration order."""
        return self._registry.keywords

    @property
    def supervisor(self) -> ProcessSupervisor:
        """Return the process supervisor."""
        return self._supervisor

    @property
    def workdir(self) -> WorkingDirectory:
        """Return the working-directory tracker."""
        return self._workdir

    @property
    def history(self) -> HistoryTracker:
        """Return the history tracker."""
        return self._history

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def last_outcome(self) -> Outcome:
        """Return the outcome of the most recent line."""
        return self._last_outcome

    @property
    def last_output(self) -> str:
        """Return the text produced by the most recent line."""
        return self._last_output

    def execute(self, line: str) -> str:
        """Record, parse, and execute one input line.

        Args:
            line: The raw line as typed (e.g. "run ls -l").

        Returns:
            The text to display, or ``EXIT_SENTINEL`` when the session
            should end (any final output is in ``last_output``).

        """
        self._history.record(line)
        tokens = tokenize(line)
        keyword, params = tokens[0], tokens[1:]

        if keyword == NO_COMMAND:
            result = CommandResult(Outcome.SUCCESS)
        else:
            result = self.dispatch(keyword, params)

        self._last_outcome = result.outcome
        self._last_output = self._format(keyword, result)
        if result.outcome is Outcome.EXIT_REQUESTED:
            return self.EXIT_SENTINEL
        return self._last_output

    def dispatch(self, keyword: str, params: list[str]) -> CommandResult:
        """Look up *keyword*, validate *params*, and run the command."""
        command = self._registry.lookup(keyword)
        if command is None:
            self._logger.log(LogLevel.WARNING, f"unknown command {keyword!r}", source="shell")
            return CommandResult(Outcome.COMMAND_NOT_FOUND)
        if not command.accepts(params):
            return CommandResult(Outcome.INVALID_PARAMETERS)

        self._logger.log(LogLevel.DEBUG, f"dispatch {keyword} {params}", source="shell")
        return command.handler(params)

    @staticmethod
    def _format(keyword: str, result: CommandResult) -> str:
        """Combine command output with the outcome's message."""
        message = result.message()
        if result.outcome is Outcome.COMMAND_NOT_FOUND:
            message = f"{message}: {keyword}"
        return "\n".join(part for part in (result.output, message) if part)

    # -- command handlers --------------------------------------------------

    def _cmd_history(self, args: list[str]) -> CommandResult:
        """Show input history, clearing it first with ``-c``."""
        if _CLEAR_FLAG in args:
            self._history.clear()
        return CommandResult(Outcome.SUCCESS, self._history.render())

    def _cmd_byebye(self, _args: list[str]) -> CommandResult:
        """Leave the shell, offering to terminate background jobs first.

        ``y``/``yes`` terminates the jobs and exits, ``n``/``no`` exits
        and leaves them running, anything else keeps the shell open.
        """
        count = self._supervisor.running_count
        if count == 0:
            return CommandResult(Outcome.EXIT_REQUESTED)

        noun = "process is" if count == 1 else "processes are"
        try:
            answer = self._confirm(f"{count} background {noun} running. Terminate? (y/n) ")
        except EOFError:
            return CommandResult(Outcome.SUCCESS)

        answer = answer.strip().lower()
        if answer in _YES:
            terminated = self._supervisor.terminate_all()
            return CommandResult(Outcome.EXIT_REQUESTED, terminated.output)
        if answer in _NO:
            return CommandResult(Outcome.EXIT_REQUESTED)
        return CommandResult(Outcome.SUCCESS)

    def _cmd_whereami(self, _args: list[str]) -> CommandResult:
        """Show the tracked working directory."""
        return CommandResult(Outcome.SUCCESS, self._workdir.current)

    def _cmd_movetodir(self, args: list[str]) -> CommandResult:
        """Change the tracked working directory."""
        if len(args) != 1:
            return CommandResult(Outcome.INVALID_PARAMETERS)
        return self._workdir.change(args[0])

    def _cmd_run(self, args: list[str]) -> CommandResult:
        """Run a program in the foreground."""
        if not args:
            return CommandResult(Outcome.INVALID_PARAMETERS)
        return self._supervisor.run(args)

    def _cmd_background(self, args: list[str]) -> CommandResult:
        """Run a program in the background."""
        if not args:
            return CommandResult(Outcome.INVALID_PARAMETERS)
        return self._supervisor.background(args)

    def _cmd_exterminate(self, args: list[str]) -> CommandResult:
        """Terminate a process by PID."""
        if len(args) != 1:
            return CommandResult(Outcome.INVALID_PARAMETERS)
        pid = _parse_positive(args[0], limit=_MAX_PID)
        if pid is None:
            return CommandResult(Outcome.INVALID_PARAMETERS)
        return self._supervisor.terminate(pid)

    def _cmd_exterminateall(self, _args: list[str]) -> CommandResult:
        """Terminate every tracked background job."""
        return self._supervisor.terminate_all()

    def _cmd_repeat(self, args: list[str]) -> CommandResult:
        """Start a program *n* times in the background."""
        if len(args) < 2:  # noqa: PLR2004
            return CommandResult(Outcome.INVALID_PARAMETERS)
        count = _parse_positive(args[0])
        if count is None:
            return CommandResult(Outcome.INVALID_PARAMETERS)
        return self._supervisor.repeat(count, args[1:])

    def _cmd_help(self, _args: list[str]) -> CommandResult:
        """List available commands."""
        width = max(len(keyword) for keyword in self._registry.keywords)
        lines = [f"{cmd.keyword:<{width}}  {cmd.summary}" for cmd in self._registry]
        return CommandResult(Outcome.SUCCESS, "\n".join(lines))

    def _cmd_log(self, args: list[str]) -> CommandResult:
        """Show the event log.

        ``-c`` clears it first; ``-w`` shows only warnings and errors.
        """
        if _CLEAR_FLAG in args:
            self._logger.clear()
        if _WARNINGS_FLAG in args:
            entries = self._logger.filter(min_level=LogLevel.WARNING)
        else:
            entries = self._logger.entries
        return CommandResult(Outcome.SUCCESS, "\n".join(str(e) for e in entries))
