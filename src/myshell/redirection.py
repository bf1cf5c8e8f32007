"""I/O redirection — ``<``, ``>`` and ``>>``.

Redirection is split into two halves that run in different processes:

1. **Parsing** (in the shell) — ``parse_redirections()`` scans the
   argument vector left to right, pulls out every operator and the
   target path that follows it, and returns a clean argv plus an
   ordered list of ``Redirection`` bindings.  Nothing is opened yet.
2. **Applying** (in the forked child) — ``apply_redirections()`` opens
   each target and ``dup2``s it onto stdin or stdout, then closes the
   spare descriptor.  Because this only ever happens after ``fork()``,
   the shell's own descriptors are never touched.

Bindings are applied in scan order, so ``cmd > a > b`` ends up writing
to ``b``: the second ``dup2`` replaces the first.  (``a`` is still
created and truncated, just like in a real shell.)

Open modes:
    - ``<``  — read-only; a missing file is an error.
    - ``>``  — write-only, create, truncate.
    - ``>>`` — write-only, create, append.
    - New files get mode ``0644``.
"""

import os
from dataclasses import dataclass
from enum import StrEnum

# rw-r--r--
CREATE_MODE = 0o644


class RedirectionError(Exception):
    """Raised when a redirection operator is missing its target."""


class RedirectKind(StrEnum):
    """The three redirection operators, keyed by their token."""

    INPUT = "<"
    TRUNCATE = ">"
    APPEND = ">>"

    @property
    def stream(self) -> int:
        """Return the standard descriptor this operator rebinds."""
        return 0 if self is RedirectKind.INPUT else 1

    @property
    def flags(self) -> int:
        """Return the ``os.open`` flags for this operator."""
        match self:
            case RedirectKind.INPUT:
                return os.O_RDONLY
            case RedirectKind.TRUNCATE:
                return os.O_WRONLY | os.O_CREAT | os.O_TRUNC
            case RedirectKind.APPEND:
                return os.O_WRONLY | os.O_CREAT | os.O_APPEND


@dataclass(frozen=True)
class Redirection:
    """One parsed redirection: an operator and its target path."""

    kind: RedirectKind
    path: str

    def __str__(self) -> str:
        """Format as it would be typed, e.g. ``> out.txt``."""
        return f"{self.kind} {self.path}"


def parse_redirections(argv: list[str]) -> tuple[list[str], list[Redirection]]:
    """Separate redirection operators from program arguments.

    Args:
        argv: Tokens of one command (already stripped of ``&``).

    Returns:
        Tuple of (clean argv, redirections in scan order).

    Raises:
        RedirectionError: If an operator is the last token.

    """
    clean: list[str] = []
    redirections: list[Redirection] = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in RedirectKind:
            if i + 1 >= len(argv):
                msg = f"missing file name after {token}"
                raise RedirectionError(msg)
            redirections.append(Redirection(kind=RedirectKind(token), path=argv[i + 1]))
            i += 2
        else:
            clean.append(token)
            i += 1
    return clean, redirections


def open_redirection(redirection: Redirection) -> int:
    """Open the target of *redirection* and return the new descriptor.

    Raises:
        OSError: If the file cannot be opened.

    """
    return os.open(redirection.path, redirection.kind.flags, CREATE_MODE)


def apply_redirections(redirections: list[Redirection]) -> None:
    """Rebind stdin/stdout of the *current* process.

    Only call this in a forked child, just before ``exec``.

    Raises:
        OSError: If any target cannot be opened.

    """
    for redirection in redirections:
        fd = open_redirection(redirection)
        # open() may hand back the stream itself if it was closed
        if fd != redirection.kind.stream:
            os.dup2(fd, redirection.kind.stream)
            os.close(fd)
