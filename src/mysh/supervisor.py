"""Process supervisor — spawning, tracking, and terminating children.

The supervisor is the part of the shell that talks to the OS process
machinery.  It owns the background job table and implements every
process-related command:

    - **run** — spawn a child and block until it exits.
    - **background** — spawn a child in its own process group, record
      its PID, and return immediately.
    - **repeat** — spawn the same background command *n* times.
    - **terminate** — deliver SIGINT → SIGTERM → SIGKILL until one
      signal is delivered, then drop the PID from the job table.
    - **terminate_all** — terminate every tracked job, then clear the
      table.

Two kinds of spawn failure are kept apart:

    - The program cannot be executed (missing, not executable, bad
      format).  ``subprocess`` reports this as an ``OSError`` carrying
      the program as its filename.  It is an ordinary CHILD_PROCESS_ERROR.
    - The OS cannot create a process at all (fork fails with EAGAIN or
      ENOMEM).  This is raised as ``ProcessCreationError`` and is fatal
      to the shell.

Design choices:
    - **Results, not exceptions** — every command returns a
      ``CommandResult``; only ``ProcessCreationError`` escapes.
    - **Tracked count, not a live poll** — ``running_count`` is the
      size of the job table.  A child that exits on its own is still
      counted until the shell terminates it.
    - **Delivery is deemed sufficient** — a child may catch or ignore
      the delivered signal; the supervisor does not wait to confirm.
"""

import contextlib
import os
import subprocess

from mysh.jobs import Job, JobTable
from mysh.logging import Logger, LogLevel
from mysh.outcome import CommandResult, Outcome
from mysh.signals import ESCALATION, Signal

# Seconds to wait for a SIGKILLed child to be reaped.
_KILL_REAP_TIMEOUT = 1.0


class ProcessCreationError(RuntimeError):
    """The OS could not create a child process at all."""


class ProcessSupervisor:
    """Spawn foreground and background children and track the latter."""

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a supervisor with an empty job table.

        Args:
            logger: Optional event log for spawns and signal delivery.

        """
        self._jobs = JobTable()
        self._logger = logger

    @property
    def running_count(self) -> int:
        """Return the number of tracked background jobs."""
        return len(self._jobs)

    @property
    def jobs(self) -> list[Job]:
        """Return the tracked background jobs in start order."""
        return self._jobs.list_jobs()

    def is_tracked(self, pid: int) -> bool:
        """Return True if *pid* is a tracked background job."""
        return pid in self._jobs

    # -- spawning ----------------------------------------------------------

    def run(self, argv: list[str]) -> CommandResult:
        """Run *argv* in the foreground and wait for it to exit.

        Args:
            argv: Program name followed by its arguments.

        Returns:
            SUCCESS if the child exited with status 0, otherwise
            CHILD_PROCESS_ERROR.

        Raises:
            ProcessCreationError: If the OS cannot create a process.

        """
        process = self._spawn(argv, background=False)
        if process is None:
            return CommandResult(Outcome.CHILD_PROCESS_ERROR)
        # The wait cannot be cancelled.  Ctrl-C reaches the child too, since
        # it shares our process group, so keep waiting until it is gone.
        interrupted = False
        while True:
            try:
                status = process.wait()
            except KeyboardInterrupt:
                interrupted = True
                self._log(LogLevel.WARNING, f"interrupted while waiting for pid {process.pid}")
                continue
            except ChildProcessError as e:
                self._log(LogLevel.WARNING, f"wait for pid {process.pid} failed: {e}")
                return CommandResult(Outcome.CHILD_PROCESS_ERROR)
            break

        self._log(LogLevel.INFO, f"pid {process.pid} exited with status {status}")
        if interrupted or status != 0:
            return CommandResult(Outcome.CHILD_PROCESS_ERROR)
        return CommandResult(Outcome.SUCCESS)

    def spawn_background(self, argv: list[str]) -> int | None:
        """Start *argv* in its own process group and track it.

        Args:
            argv: Program name followed by its arguments.

        Returns:
            The new PID, or None if the program could not be executed.

        Raises:
            ProcessCreationError: If the OS cannot create a process.

        """
        process = self._spawn(argv, background=True)
        if process is None:
            return None
        self._jobs.add(Job(pid=process.pid, argv=list(argv), process=process))
        return process.pid

    def background(self, argv: list[str]) -> CommandResult:
        """Start *argv* in the background and report its PID."""
        pid = self.spawn_background(argv)
        if pid is None:
            return CommandResult(Outcome.CHILD_PROCESS_ERROR)
        return CommandResult(Outcome.SUCCESS, f"PID: {pid}")

    def repeat(self, count: int, argv: list[str]) -> CommandResult:
        """Start *count* independent background copies of *argv*.

        Spawns happen one after another.  A copy that fails to execute
        does not stop the rest; the outcome of the last spawn is the
        one returned.

        Args:
            count: How many copies to start (must be positive).
            argv: Program name followed by its arguments.

        Returns:
            The last spawn's outcome, with every assigned PID as output.

        """
        if count <= 0:
            return CommandResult(Outcome.INVALID_PARAMETERS)

        pids: list[int] = []
        outcome = Outcome.SUCCESS
        for _ in range(count):
            pid = self.spawn_background(argv)
            if pid is None:
                outcome = Outcome.CHILD_PROCESS_ERROR
            else:
                pids.append(pid)
                outcome = Outcome.SUCCESS
        return CommandResult(outcome, "PIDs: " + ", ".join(str(p) for p in pids))

    def _spawn(self, argv: list[str], *, background: bool) -> subprocess.Popen[bytes] | None:
        """Create a child for *argv*, or return None if it cannot execute."""
        # process_group=0 puts the child in a new group led by itself.
        group = 0 if background else None
        try:
            process = subprocess.Popen(argv, process_group=group)  # noqa: S603
        except OSError as e:
            if e.filename is None:
                self._log(LogLevel.ERROR, f"cannot create a process for {argv[0]!r}: {e}")
                msg = f"cannot create process: {e}"
                raise ProcessCreationError(msg) from e
            self._log(LogLevel.WARNING, f"cannot execute {argv[0]!r}: {e.strerror}")
            return None
        except (ValueError, subprocess.SubprocessError) as e:
            self._log(LogLevel.WARNING, f"cannot execute {argv[0]!r}: {e}")
            return None

        kind = "background" if background else "foreground"
        self._log(LogLevel.INFO, f"started {kind} pid {process.pid}: {' '.join(argv)}")
        return process

    # -- termination -------------------------------------------------------

    def deliver(self, pid: int) -> Signal | None:
        """Deliver the first signal of the escalation ladder that gets through.

        Args:
            pid: Target process identifier.

        Returns:
            The signal that was delivered, or None if every delivery failed.

        """
        for sig in ESCALATION:
            try:
                os.kill(pid, sig)
            except OSError as e:
                self._log(LogLevel.WARNING, f"{sig.name} to pid {pid} failed: {e.strerror}")
                continue
            self._log(LogLevel.INFO, f"{sig.name} delivered to pid {pid}")
            return sig
        return None

    def terminate(self, pid: int) -> CommandResult:
        """Terminate *pid* using the escalation ladder.

        A PID that is not tracked can still be signalled; it is simply
        reported as already dead because the shell has nothing to
        forget about it.

        Args:
            pid: Target process identifier.

        Returns:
            SUCCESS on delivery, COULD_NOT_TERMINATE otherwise.

        """
        delivered = self.deliver(pid)
        if delivered is None:
            return CommandResult(Outcome.COULD_NOT_TERMINATE)

        job = self._jobs.remove(pid)
        if job is None:
            return CommandResult(Outcome.SUCCESS, f"Process {pid} was already dead")
        self._reap(job, delivered)
        return CommandResult(Outcome.SUCCESS, f"Exterminated {pid}")

    def terminate_all(self) -> CommandResult:
        """Terminate every tracked job, then clear the job table.

        The table is cleared even if some deliveries failed.

        Returns:
            SUCCESS, or COULD_NOT_TERMINATE if any delivery failed, with
            the terminated PIDs as output.

        """
        terminated: list[int] = []
        failed: list[int] = []
        for job in self._jobs.list_jobs():
            delivered = self.deliver(job.pid)
            if delivered is None:
                failed.append(job.pid)
            else:
                terminated.append(job.pid)
                self._reap(job, delivered)
        self._jobs.clear()

        noun = "process" if len(terminated) == 1 else "processes"
        lines = [f"Exterminated {len(terminated)} {noun}"]
        if terminated:
            lines[0] += ": " + ", ".join(str(p) for p in terminated)
        if failed:
            lines.append("Could not exterminate: " + ", ".join(str(p) for p in failed))
            return CommandResult(Outcome.COULD_NOT_TERMINATE, "\n".join(lines))
        return CommandResult(Outcome.SUCCESS, "\n".join(lines))

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _reap(job: Job, delivered: Signal) -> None:
        """Collect the child's exit status so it does not linger as a zombie.

        Only SIGKILL is certain to end the child, so only then is it worth
        a short wait.  After a catchable signal the child is polled once.
        """
        if job.process is None:
            return
        if delivered is Signal.SIGKILL:
            with contextlib.suppress(subprocess.TimeoutExpired):
                job.process.wait(timeout=_KILL_REAP_TIMEOUT)
        else:
            job.process.poll()

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="supervisor")
