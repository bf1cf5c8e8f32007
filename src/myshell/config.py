"""Shell settings read from ``MYSHELL_*`` environment variables.

The shell takes no command-line flags.  Everything tunable comes from
the environment it was started in:

    ``MYSHELL_HISTSIZE``      history ring capacity (default 10)
    ``MYSHELL_REAP``          ``0`` disables background reaping (default on)
    ``MYSHELL_LOG_LEVEL``     echo log entries at or above this level
                              to stderr (default: no echo)
    ``MYSHELL_LOG_CAPACITY``  entries kept by the in-memory log (default 1000)
"""

from dataclasses import dataclass

from myshell.env import Environment
from myshell.logging import LogLevel

ENV_PREFIX = "MYSHELL_"

DEFAULT_HISTORY_SIZE = 10
DEFAULT_LOG_CAPACITY = 1000

_FALSE_VALUES = frozenset(["0", "false", "no", "off"])


@dataclass(frozen=True)
class ShellConfig:
    """Immutable shell settings.

    Attributes:
        history_size: Number of command lines the history ring keeps.
        reap_background: Collect finished background children before
            each command.
        log_level: Minimum level echoed to stderr, or ``None``.
        log_capacity: Number of entries the in-memory log keeps.

    """

    history_size: int = DEFAULT_HISTORY_SIZE
    reap_background: bool = True
    log_level: LogLevel | None = None
    log_capacity: int = DEFAULT_LOG_CAPACITY

    def __post_init__(self) -> None:
        """Reject sizes the history ring and logger cannot honour."""
        if self.history_size < 1:
            msg = f"{ENV_PREFIX}HISTSIZE must be positive, got {self.history_size}"
            raise ValueError(msg)
        if self.log_capacity < 1:
            msg = f"{ENV_PREFIX}LOG_CAPACITY must be positive, got {self.log_capacity}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, env: Environment) -> "ShellConfig":
        """Build settings from *env*, falling back to defaults.

        Raises:
            ValueError: If a variable is set to an unusable value.

        """
        reap = env.get(f"{ENV_PREFIX}REAP", "")
        level_name = env.get(f"{ENV_PREFIX}LOG_LEVEL", "")
        try:
            log_level = LogLevel.parse(level_name) if level_name else None
        except ValueError as e:
            msg = f"{ENV_PREFIX}LOG_LEVEL: {e}"
            raise ValueError(msg) from None
        return cls(
            history_size=env.get_int(f"{ENV_PREFIX}HISTSIZE", DEFAULT_HISTORY_SIZE),
            reap_background=(reap or "").strip().lower() not in _FALSE_VALUES,
            log_level=log_level,
            log_capacity=env.get_int(f"{ENV_PREFIX}LOG_CAPACITY", DEFAULT_LOG_CAPACITY),
        )
