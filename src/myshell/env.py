"""Environment variables — the shell's view of its process environment.

Every Unix process carries a set of ``KEY=VALUE`` string pairs
inherited from its parent.  The shell reads a handful of them: ``USER``
for the prompt, and the ``MYSHELL_*`` family for its own settings
(see ``myshell.config``).  Children inherit the real ``os.environ``
untouched; this class is a read-mostly snapshot for the shell itself.

Key design properties:
    - **Snapshot, not a live view** — ``from_os()`` copies
      ``os.environ`` once, so tests can build an ``Environment`` by
      hand without touching the real process environment.
    - **Strings only** — both keys and values are strings;
      ``get_int`` converts on the way out.
"""

import os


class Environment:
    """A read-only view of environment variables.

    Each instance holds its own copy, so later changes to the real
    process environment are not seen.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    @classmethod
    def from_os(cls) -> "Environment":
        """Return a snapshot of the current process environment."""
        return cls(initial=dict(os.environ))

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        """Return *key* parsed as an integer, or *default* if unset or blank.

        Raises:
            ValueError: If the value is set but is not an integer.

        """
        raw = self._vars.get(key, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            msg = f"{key} must be an integer, got '{raw}'"
            raise ValueError(msg) from None
