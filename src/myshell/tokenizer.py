"""Tokenizer — turn a command line into an argument vector.

The shell's grammar is deliberately tiny: words are separated by runs
of the space character, and that's all.  There is no quoting, no
escaping, no variable expansion and no globbing, so ``"a b"`` is two
tokens (``'"a'`` and ``'b"'``).

The argument vector is a plain growable list.  Nothing caps the number
of tokens, so a long command line is never silently truncated.

The background detector lives here too, because it is a pure
operation on the token list: a trailing ``&`` token is removed and
reported, anything else is left alone.
"""

BACKGROUND_MARKER = "&"


def tokenize(line: str) -> list[str]:
    """Split *line* on runs of spaces.

    Args:
        line: A command line with its terminator already stripped.

    Returns:
        The tokens in order; empty for an empty or all-space line.

    """
    return [token for token in line.split(" ") if token]


def detect_background(argv: list[str]) -> bool:
    """Strip a trailing ``&`` from *argv* in place.

    Only the last element is inspected; an ``&`` anywhere else is an
    ordinary argument.

    Args:
        argv: The argument vector (mutated when the marker is present).

    Returns:
        True if the command should run in the background.

    """
    if argv and argv[-1] == BACKGROUND_MARKER:
        argv.pop()
        return True
    return False
