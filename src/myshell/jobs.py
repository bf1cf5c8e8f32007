"""Background children — bookkeeping for ``command &``.

When you run ``sleep 60 &`` the shell forks a child and returns to the
prompt straight away.  The child keeps running on its own and, when it
exits, becomes a *zombie* until its parent collects the exit status
with ``waitpid``.  A shell that never does this slowly fills the
process table with dead children.

The ``JobTable`` remembers every background child and ``reap()``
collects the finished ones without blocking.  The shell calls it at
the top of each command, so zombies live at most until the next
prompt.

This is bookkeeping only: there is no ``jobs``/``fg``/``bg`` command
and no signal-based suspension.

Design choices:
    - **Job numbers are small** — ``1``, ``2``, ... via
      ``itertools.count``, independent of the (large) PIDs.
    - **Only our own PIDs are waited on** — ``waitpid(pid, WNOHANG)``
      per job, never ``waitpid(-1, ...)``, so foreground waits and
      anything else sharing the process are never disturbed.
"""

import os
from dataclasses import dataclass
from enum import StrEnum
from itertools import count


class JobStatus(StrEnum):
    """Status of a background child."""

    RUNNING = "running"
    DONE = "done"


@dataclass
class Job:
    """A background child process.

    Attributes:
        job_id: Small human-friendly job number.
        pid: The operating-system process id.
        name: The command line that started it.
        status: Current status.
        exit_code: Exit code once reaped (``None`` while running, or if
            the status could not be collected).

    """

    job_id: int
    pid: int
    name: str
    status: JobStatus = JobStatus.RUNNING
    exit_code: int | None = None


class JobTable:
    """Track background children until they are reaped."""

    def __init__(self) -> None:
        """Create an empty job table."""
        self._jobs: dict[int, Job] = {}
        self._counter = count(start=1)

    def add(self, *, pid: int, name: str) -> Job:
        """Start tracking a background child.

        Args:
            pid: The child's process id.
            name: The command line that started it.

        Returns:
            The newly created job.

        """
        job_id = next(self._counter)
        job = Job(job_id=job_id, pid=pid, name=name)
        self._jobs[job_id] = job
        return job

    def reap(self) -> list[Job]:
        """Collect finished children without blocking.

        Returns:
            The jobs that finished since the last call, now ``DONE``
            and no longer tracked.

        """
        finished: list[Job] = []
        for job in list(self._jobs.values()):
            try:
                pid, status = os.waitpid(job.pid, os.WNOHANG)
            except ChildProcessError:
                # Already collected elsewhere; the status is gone.
                pid, status = job.pid, None
            if pid == 0:
                continue
            job.status = JobStatus.DONE
            job.exit_code = os.waitstatus_to_exitcode(status) if status is not None else None
            del self._jobs[job.job_id]
            finished.append(job)
        return finished

    def __len__(self) -> int:
        """Return the number of running jobs."""
        return len(self._jobs)
