"""Allow ``python -m sdshell``."""

from sdshell.repl import main

main()
