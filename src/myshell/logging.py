"""Shell event log.

The logger records structured entries for interpreter events: what
was dispatched, which children were forked, how they ended, and every
diagnostic the shell reported.  It is the shell's equivalent of a
kernel log buffer (``dmesg``): an in-memory audit trail that can also
be echoed to a stream while the shell runs.

- **LogLevel** — severity levels ordered by severity (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, pid).
- **Logger** — a bounded log with optional echo.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Bounded buffer** — an interactive shell can run for days; the
      oldest entries fall off once ``capacity`` is reached.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import TextIO


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """Return the level called *name* (case-insensitive).

        Raises:
            ValueError: If *name* is not a known level.

        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            msg = f"unknown log level '{name}'"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "launcher").
        pid: The process the event concerns (0 = the shell itself).

    """

    level: LogLevel
    message: str
    source: str
    pid: int = 0

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded log buffer with optional echo.

    When both *echo* and *echo_level* are given, every entry at or
    above *echo_level* is also written to *echo* as it is recorded.
    """

    def __init__(
        self,
        capacity: int = 1000,
        *,
        echo: TextIO | None = None,
        echo_level: LogLevel | None = None,
    ) -> None:
        """Create an empty logger.

        Args:
            capacity: Maximum number of entries kept in memory.
            echo: Stream that receives echoed entries.
            echo_level: Minimum level to echo; ``None`` disables echo.

        Raises:
            ValueError: If *capacity* is less than one.

        """
        if capacity < 1:
            msg = f"log capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._echo = echo
        self._echo_level = echo_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all retained log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        pid: int = 0,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            pid: Process id associated with the event.

        """
        entry = LogEntry(level=level, message=message, source=source, pid=pid)
        self._entries.append(entry)
        if self._echo is not None and self._echo_level is not None and level >= self._echo_level:
            print(entry, file=self._echo, flush=True)  # noqa: T201
