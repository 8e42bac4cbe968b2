"""Background job table.

A job is a child process the shell started without waiting for it.
The table is keyed by PID and remembers insertion order, so listings
come out in the order the jobs were started.

Key ideas:
    - **No liveness polling** — a job stays in the table until the
      shell terminates it.  A child that exits on its own is still
      counted; the table reflects the shell's bookkeeping, not the OS.
    - **One entry per PID** — adding a PID that is already tracked
      replaces the old entry.
"""

import subprocess
from dataclasses import dataclass, field


@dataclass
class Job:
    """A tracked background child.

    Attributes:
        pid: The OS process identifier.
        argv: The argument vector the child was started with.
        process: The ``Popen`` handle, used to reap the child.

    """

    pid: int
    argv: list[str]
    process: subprocess.Popen[bytes] | None = field(default=None, repr=False, compare=False)


class JobTable:
    """Ordered mapping of PID to background job."""

    def __init__(self) -> None:
        """Create an empty job table."""
        self._jobs: dict[int, Job] = {}

    def __len__(self) -> int:
        """Return the number of tracked jobs."""
        return len(self._jobs)

    def __contains__(self, pid: object) -> bool:
        """Return True if *pid* is tracked."""
        return pid in self._jobs

    def add(self, job: Job) -> Job:
        """Track *job*, replacing any entry with the same PID."""
        self._jobs.pop(job.pid, None)
        self._jobs[job.pid] = job
        return job

    def remove(self, pid: int) -> Job | None:
        """Stop tracking *pid* and return its job, or None if untracked."""
        return self._jobs.pop(pid, None)

    def list_jobs(self) -> list[Job]:
        """Return all tracked jobs in start order."""
        return list(self._jobs.values())

    def clear(self) -> None:
        """Forget every job."""
        self._jobs.clear()
