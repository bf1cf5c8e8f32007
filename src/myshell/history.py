"""Command history — a fixed-capacity ring of past command lines.

Every non-blank line the user types is recorded, including built-ins
like ``history`` itself.  Once the ring is full, recording a new line
silently drops the oldest one, so ``history`` always shows the most
recent ``capacity`` commands numbered from 1.

Design choices:
    - **deque(maxlen=...)** gives FIFO eviction for free.
    - **Numbers are assigned when rendering**, not stored: after an
      eviction every surviving entry moves down one position.
    - **Owned by the shell**, passed around explicitly.  There is no
      module-level history list.
"""

from collections import deque
from dataclasses import dataclass

DEFAULT_CAPACITY = 10


@dataclass(frozen=True)
class HistoryEntry:
    """A recorded command line and its 1-based position in the ring."""

    index: int
    command: str

    def __str__(self) -> str:
        """Format as ``<index> <command>``."""
        return f"{self.index} {self.command}"


class History:
    """Insertion-ordered command log with fixed capacity."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty history ring.

        Raises:
            ValueError: If *capacity* is less than one.

        """
        if capacity < 1:
            msg = f"history capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._commands: deque[str] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries kept."""
        return self._capacity

    def add(self, command: str) -> None:
        """Record *command*, evicting the oldest entry when full."""
        self._commands.append(command)

    def entries(self) -> list[HistoryEntry]:
        """Return every entry, oldest first, numbered from 1."""
        return [HistoryEntry(index=i, command=cmd) for i, cmd in enumerate(self._commands, start=1)]

    def format(self) -> str:
        """Render the ring one entry per line (empty string when empty)."""
        return "\n".join(str(entry) for entry in self.entries())

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._commands)
