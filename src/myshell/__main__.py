"""Allow ``python -m myshell``."""

from myshell.repl import main

main()
