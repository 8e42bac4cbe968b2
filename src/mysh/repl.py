"""Interactive REPL (Read-Eval-Print Loop) for the shell.

The REPL is the terminal interface.  It creates a shell, prints the
banner, and enters the classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the line to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

This module keeps the I/O loop separate from the shell logic.  The
shell is fully testable (returns strings, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.

The helper functions (``build_prompt``, ``format_banner``) are pure and
testable.  The ``run()`` function is the I/O entrypoint.
"""

import readline
import sys

from mysh.completer import Completer
from mysh.shell import Shell
from mysh.supervisor import ProcessCreationError

EXIT_PROCESS_CREATION_FAILED = 2
"""Exit status when the OS cannot create a child process."""


def format_banner(command_names: list[str]) -> str:
    """Format the startup banner listing the available commands.

    Args:
        command_names: Registered keywords in registration order.

    Returns:
        A string suitable for printing to the console.

    """
    body = "\n".join(f"  {name}" for name in command_names)
    return f"There are {len(command_names)} commands available:\n{body}\n"


def build_prompt(shell: Shell) -> str:
    """Build the prompt string showing the tracked working directory.

    Args:
        shell: The running shell.

    Returns:
        A prompt string like ``/home/alice # ``.

    """
    return f"{shell.workdir.current} # "


def run() -> None:
    """Run the interactive shell until the user leaves.

    This is the main entrypoint.  It handles:
    - Shell creation and tab completion.
    - The read-eval-print loop.
    - Ctrl+D (leave like ``byebye``) and Ctrl+C (discard the line).
    - Fatal process-creation failure (exit status 2).
    """
    shell = Shell()

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(shell.command_names))  # noqa: T201

    try:
        while True:
            try:
                line = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D — leave, abandoning any background jobs
                print()  # noqa: T201
                break
            except KeyboardInterrupt:
                print()  # noqa: T201
                continue

            result = shell.execute(line)
            if result == Shell.EXIT_SENTINEL:
                if shell.last_output:
                    print(shell.last_output)  # noqa: T201
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C while waiting on a foreground child
        print("\nInterrupted.")  # noqa: T201

    except ProcessCreationError as e:
        print(f"mysh: fatal: {e}", file=sys.stderr)  # noqa: T201
        sys.exit(EXIT_PROCESS_CREATION_FAILED)
