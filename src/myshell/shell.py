"""The shell — command interpreter.

The shell reads one command line at a time, decides whether it names a
built-in or an external program, and runs it:

    line → tokenize → history → built-in?
                               ├─ yes: run in this process
                               └─ no:  strip ``&`` → strip redirections
                                       → fork/exec (wait unless ``&``)

Built-ins exist because some commands must change the *shell's own*
state.  ``cd`` run in a child would change the child's working
directory and then vanish with it; ``history`` reads a ring that only
the shell holds; ``exit`` ends the loop.

Design choices:
    - **Returns strings, not prints.**  ``execute()`` returns whatever
      the caller should display (built-in output, the background
      notice); diagnostics go to the error stream.  External programs
      of course write straight to the terminal.
    - **Command dispatch via a dict.**  Adding a built-in means
      writing a method and adding one dict entry.
    - **Fixed order for external commands.**  ``&`` is stripped before
      redirections are parsed so that ``cmd > out &`` never treats
      ``&`` as part of the target, and both happen before ``fork``.
"""

import os
import sys
from collections.abc import Callable
from typing import TextIO

from myshell.config import ShellConfig
from myshell.history import History
from myshell.jobs import JobTable
from myshell.launcher import ProcessLauncher
from myshell.logging import Logger, LogLevel
from myshell.redirection import RedirectionError, parse_redirections
from myshell.tokenizer import detect_background, tokenize

PROGRAM_NAME = "myshell"

# Type alias for a built-in handler: takes the arguments, returns output.
type _Handler = Callable[[list[str]], str]


class Shell:
    """Command interpreter owning the history ring and the job table."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        config: ShellConfig | None = None,
        logger: Logger | None = None,
        err: TextIO | None = None,
    ) -> None:
        """Create a shell.

        Args:
            config: Settings; defaults to ``ShellConfig()``.
            logger: Event log; a fresh one sized from *config* if omitted.
            err: Stream for diagnostics; defaults to ``sys.stderr`` at
                the time each diagnostic is written.

        """
        self._config = config if config is not None else ShellConfig()
        self._logger = logger if logger is not None else Logger(self._config.log_capacity)
        self._err = err
        self._history = History(self._config.history_size)
        self._jobs = JobTable()
        self._launcher = ProcessLauncher(logger=self._logger, jobs=self._jobs, program=PROGRAM_NAME)

        # Built-in dispatch table.  ``exit`` is handled before lookup.
        self._builtins: dict[str, _Handler] = {
            "cd": self._cmd_cd,
            "history": self._cmd_history,
        }

    @property
    def history(self) -> History:
        """Return the command history ring."""
        return self._history

    @property
    def jobs(self) -> JobTable:
        """Return the table of background children."""
        return self._jobs

    @property
    def logger(self) -> Logger:
        """Return the shell's event log."""
        return self._logger

    @property
    def config(self) -> ShellConfig:
        """Return the shell's settings."""
        return self._config

    def execute(self, line: str) -> str:
        """Run one command line.

        Args:
            line: The raw line, terminator already stripped.

        Returns:
            Text to display (possibly empty), or ``EXIT_SENTINEL`` when
            the shell should stop.

        """
        if self._config.reap_background:
            self.reap()

        stripped = line.strip()
        if not stripped:
            return ""
        self._history.add(stripped)

        argv = tokenize(stripped)
        if not argv:
            return ""

        name = argv[0]
        if name == "exit":
            self._logger.log(LogLevel.INFO, "exit requested", source="shell")
            return self.EXIT_SENTINEL

        handler = self._builtins.get(name)
        if handler is not None:
            self._logger.log(LogLevel.DEBUG, f"built-in '{name}'", source="shell")
            return handler(argv[1:])

        return self._run_external(argv)

    def reap(self) -> None:
        """Collect finished background children and log their status."""
        for job in self._jobs.reap():
            self._logger.log(
                LogLevel.INFO,
                f"[{job.job_id}] done '{job.name}' (exit code: {job.exit_code})",
                source="jobs",
                pid=job.pid,
            )

    def _run_external(self, argv: list[str]) -> str:
        """Strip ``&`` and redirections, then hand off to the launcher."""
        background = detect_background(argv)
        if not argv:
            return ""

        try:
            argv, redirections = parse_redirections(argv)
        except RedirectionError as e:
            self._report(f"{PROGRAM_NAME}: syntax error: {e}")
            return ""
        if not argv:
            self._report(f"{PROGRAM_NAME}: missing command")
            return ""

        result = self._launcher.launch(argv, redirections, background=background)
        if result is not None and result.background:
            return f"Process running in background with PID: {result.pid}"
        return ""

    def _report(self, message: str) -> None:
        """Write a diagnostic to the error stream and the log."""
        print(message, file=self._err if self._err is not None else sys.stderr)  # noqa: T201
        self._logger.log(LogLevel.ERROR, message, source="shell")

    # -- Built-in handlers -----------------------------------------------

    def _cmd_cd(self, args: list[str]) -> str:
        """Change the shell's working directory."""
        if len(args) != 1:
            self._report(f'{PROGRAM_NAME}: expected argument to "cd"')
            return ""
        target = args[0]
        try:
            os.chdir(target)
        except OSError as e:
            self._report(f"{PROGRAM_NAME}: cd: {target}: {e.strerror}")
            return ""
        self._logger.log(LogLevel.DEBUG, f"cwd is now {os.getcwd()}", source="shell")
        return ""

    def _cmd_history(self, _args: list[str]) -> str:
        """Show command history, oldest first."""
        return self._history.format()
