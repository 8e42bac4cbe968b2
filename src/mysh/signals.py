"""Termination signals and the escalation ladder.

``exterminate`` does not simply send SIGKILL.  It asks politely first
and only gets more forceful when a signal cannot even be *delivered*:

    - **SIGINT** (2) — interrupt, as if the user pressed Ctrl-C.
    - **SIGTERM** (15) — polite termination request.
    - **SIGKILL** (9) — forced termination.  Uncatchable.

Delivery success is not the same as death: a child may catch or ignore
SIGINT and SIGTERM.  The supervisor deems a delivered signal
sufficient and does not wait to confirm the process is gone.

Design choices:
    - **IntEnum with the platform's values** — taken from the
      ``signal`` module so ``os.kill`` accepts them directly.
    - **Data-driven escalation** — ``ESCALATION`` is an ordered tuple
      rather than nested try/except blocks in the supervisor.
"""

import signal
from enum import IntEnum


class Signal(IntEnum):
    """Signals used to terminate background jobs."""

    SIGINT = signal.SIGINT
    SIGTERM = signal.SIGTERM
    SIGKILL = signal.SIGKILL


ESCALATION: tuple[Signal, ...] = (Signal.SIGINT, Signal.SIGTERM, Signal.SIGKILL)
"""Signals tried in order until one is delivered."""
