"""Process launcher — fork, redirect, exec, wait.

Running an external program is the classic Unix two-step:

1. **fork()** duplicates the shell.  Parent and child continue from
   the same point; ``fork`` returns the child's PID to the parent and
   0 to the child.
2. **exec()** (``execvp``) replaces the child's program image with the
   requested program, searching ``PATH`` for ``argv[0]``.

Between the two, the child applies its redirections (``dup2`` onto
stdin/stdout).  This is why redirection never leaks into the shell:
only the child's descriptor table is modified.

The parent then either **waits** (foreground) or records the child in
the job table and returns immediately (background).

The child must never return into the shell's Python code: if the
redirection or the exec fails it writes a diagnostic straight to
descriptor 2 and leaves with ``os._exit`` (no ``atexit`` handlers, no
flushing of buffers inherited from the parent).
"""

import os
import signal
import sys
from dataclasses import dataclass
from typing import NoReturn

from myshell.jobs import JobTable
from myshell.logging import Logger, LogLevel
from myshell.redirection import Redirection, apply_redirections

EXIT_FAILURE = 1

# Python ignores these at startup and ignored signals survive exec.
_RESTORED_SIGNALS = (signal.SIGPIPE, signal.SIGXFSZ)

_SOURCE = "launcher"


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of one launch.

    Attributes:
        pid: The child's process id.
        background: Whether the shell returned without waiting.
        exit_code: The child's exit code (negative signal number if it
            was killed), or ``None`` for a background launch.

    """

    pid: int
    background: bool
    exit_code: int | None = None


class ProcessLauncher:
    """Create child processes for external commands."""

    def __init__(self, *, logger: Logger, jobs: JobTable, program: str = "myshell") -> None:
        """Create a launcher.

        Args:
            logger: Log receiving fork/exec/wait events.
            jobs: Table that tracks background children.
            program: Name used to prefix child-side diagnostics.

        """
        self._logger = logger
        self._jobs = jobs
        self._program = program

    def launch(
        self,
        argv: list[str],
        redirections: list[Redirection],
        *,
        background: bool = False,
    ) -> LaunchResult | None:
        """Run *argv* as a child process.

        Args:
            argv: Clean argument vector; ``argv[0]`` names the program.
            redirections: Bindings to apply in the child before exec.
            background: Return without waiting for the child.

        Returns:
            The launch result, or ``None`` if ``fork`` itself failed
            (the error has been reported to stderr).

        Raises:
            ValueError: If *argv* is empty.

        """
        if not argv:
            msg = "cannot launch an empty command"
            raise ValueError(msg)

        # Anything still buffered would otherwise be written twice.
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            message = f"{self._program}: fork: {e.strerror}"
            print(message, file=sys.stderr)  # noqa: T201
            self._logger.log(LogLevel.ERROR, message, source=_SOURCE)
            return None

        if pid == 0:
            self._exec_child(argv, redirections)

        command = " ".join(argv)
        self._logger.log(LogLevel.DEBUG, f"forked '{command}'", source=_SOURCE, pid=pid)

        if background:
            job = self._jobs.add(pid=pid, name=command)
            self._logger.log(LogLevel.INFO, f"background job {job.job_id}", source="jobs", pid=pid)
            return LaunchResult(pid=pid, background=True)

        exit_code = self._wait(pid)
        self._logger.log(LogLevel.DEBUG, f"exited with code {exit_code}", source=_SOURCE, pid=pid)
        return LaunchResult(pid=pid, background=False, exit_code=exit_code)

    def _exec_child(self, argv: list[str], redirections: list[Redirection]) -> NoReturn:
        """Restore default signals, apply redirections, exec.  Never returns."""
        try:
            try:
                for sig in _RESTORED_SIGNALS:
                    signal.signal(sig, signal.SIG_DFL)
                apply_redirections(redirections)
            except OSError as e:
                self._child_error(f"{e.filename}: {e.strerror}")
            else:
                try:
                    os.execvp(argv[0], argv)
                except OSError as e:
                    self._child_error(f"{argv[0]}: {e.strerror}")
        finally:
            os._exit(EXIT_FAILURE)

    def _child_error(self, detail: str) -> None:
        """Write a diagnostic to descriptor 2 from inside the child."""
        os.write(2, f"{self._program}: {detail}\n".encode())

    def _wait(self, pid: int) -> int:
        """Block until *pid* terminates and return its exit code.

        An interrupt arriving while we wait is delivered to the child
        by the terminal as well, so the shell keeps waiting for it
        rather than abandoning a still-running foreground process.
        """
        while True:
            try:
                _, status = os.waitpid(pid, 0)
            except KeyboardInterrupt:
                self._logger.log(
                    LogLevel.INFO, "interrupted while waiting", source=_SOURCE, pid=pid
                )
                continue
            return os.waitstatus_to_exitcode(status)
