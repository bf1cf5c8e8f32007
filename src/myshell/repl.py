"""Interactive REPL (Read-Eval-Print Loop) for the shell.

The REPL is the terminal side of the interpreter.  It builds a shell
from the environment and enters the classic loop:

    1. **Read** — display a prompt and read a line.
    2. **Eval** — pass the line to ``shell.execute()``.
    3. **Print** — display the result, if any.
    4. **Loop** — repeat until ``exit`` or end of input.

This module keeps the I/O loop separate from the shell logic.
``build_prompt`` is pure and testable; ``run()`` takes the line reader
as a parameter so the loop itself can be driven from tests.

Interrupts:
    - **Ctrl+C at the prompt** abandons the half-typed line and draws a
      fresh prompt.  The shell keeps running.
    - **Ctrl+D** (end of input) behaves like ``exit``.
"""

import os
import readline  # noqa: F401  (gives input() line editing)
import sys
from collections.abc import Callable

from myshell.config import ShellConfig
from myshell.env import Environment
from myshell.logging import Logger, LogLevel
from myshell.shell import PROGRAM_NAME, Shell

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_prompt(env: Environment, cwd: str | None = None) -> str:
    """Build the prompt string, e.g. ``alice@myshell:/home/alice> ``.

    Args:
        env: Environment supplying ``USER``.
        cwd: Working directory to show; defaults to the current one.

    Returns:
        The prompt text.

    """
    if cwd is None:
        try:
            cwd = os.getcwd()
        except FileNotFoundError:
            # The directory was removed out from under us.
            cwd = "?"
    user = env.get("USER") or "user"
    return f"{user}@{PROGRAM_NAME}:{cwd}> "


def run(
    *,
    reader: Callable[[str], str] = input,
    env: Environment | None = None,
) -> int:
    """Run the interactive loop until ``exit`` or end of input.

    Args:
        reader: Called with the prompt, returns one line.  Raises
            ``EOFError`` when input is exhausted.
        env: Environment to configure from; defaults to ``os.environ``.

    Returns:
        The process exit status.

    """
    env = env if env is not None else Environment.from_os()
    try:
        config = ShellConfig.from_env(env)
    except ValueError as e:
        print(f"{PROGRAM_NAME}: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE

    logger = Logger(config.log_capacity, echo=sys.stderr, echo_level=config.log_level)
    shell = Shell(config=config, logger=logger)
    logger.log(LogLevel.INFO, f"started (pid {os.getpid()})", source="repl")

    while True:
        try:
            line = reader(build_prompt(env))
        except EOFError:
            # Ctrl+D — same as exit
            print()  # noqa: T201
            break
        except KeyboardInterrupt:
            # Ctrl+C — drop the pending line, redraw the prompt
            print()  # noqa: T201
            continue
        except MemoryError:
            print(f"{PROGRAM_NAME}: allocation error", file=sys.stderr)  # noqa: T201
            return EXIT_FAILURE

        result = shell.execute(line)
        if result == Shell.EXIT_SENTINEL:
            break
        if result:
            print(result)  # noqa: T201

    logger.log(LogLevel.INFO, f"exiting with {len(shell.jobs)} background job(s)", source="repl")
    return EXIT_SUCCESS


def main() -> None:
    """Console-script entrypoint."""
    sys.exit(run())
