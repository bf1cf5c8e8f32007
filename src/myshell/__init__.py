"""myshell — a small line-oriented Unix command interpreter."""

__version__ = "0.1.0"
