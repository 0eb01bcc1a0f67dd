"""Interactive REPL (Read-Eval-Print Loop) for the shell.

The REPL is the terminal interface.  It prints a banner once, then
enters the classic loop:

    1. **Read** — display a prompt and read one line of any length.
    2. **Eval** — pass the line to ``shell.execute()``, which splits it,
       runs a builtin or launches a program, and waits for it.
    3. **Loop** — repeat until a command returns ``Continuation.STOP``.

This module keeps the I/O loop separate from the dispatch logic.  The
helper functions (``format_banner``, ``read_line``) are small and
testable.  ``run()`` is the I/O entrypoint and ``main()`` the console
script.

End of input (Ctrl+D, or the end of a piped script) stops the loop like
``exit`` unless the config says to keep prompting.
"""

from __future__ import annotations

import readline
import sys
from typing import TYPE_CHECKING, TextIO

from sdshell.builtins import BUILTINS, Continuation
from sdshell.completer import Completer
from sdshell.config import ShellConfig
from sdshell.shell import Shell

if TYPE_CHECKING:
    from collections.abc import Iterable

EXIT_SUCCESS = 0

_BANNER_WIDTH = 80


def format_banner(builtin_names: Iterable[str] = BUILTINS) -> str:
    """Format the startup banner.

    Args:
        builtin_names: Names to list, numbered from 1.

    Returns:
        A multi-line string ending in a newline.

    """
    rule = "-" * _BANNER_WIDTH
    lines = [
        "",
        rule,
        "\t\t| Welcome to SDSHELL. |",
        rule,
        "Type command name and argument(s), and hit ENTER.",
        "The following are built in:",
    ]
    lines.extend(f"{i}. {name}" for i, name in enumerate(builtin_names, start=1))
    lines.append("Use the man command for information on other commands.")
    return "\n".join(lines) + "\n"


def read_line(stream: TextIO, *, prompt: str = "", out: TextIO | None = None) -> str | None:
    """Read one line from *stream*, with no length limit.

    When *stream* is the interactive terminal, ``input()`` is used so
    readline provides editing, history and completion.  Otherwise the
    prompt is written to *out* and the stream is read directly.

    Args:
        stream: Where to read from.
        prompt: Text shown before reading.
        out: Where the prompt goes for non-interactive reads.

    Returns:
        The line including any trailing newline, or ``None`` at end of
        input when nothing was read.

    """
    if stream is sys.stdin and stream.isatty():
        try:
            return input(prompt)
        except EOFError:
            return None

    out = out if out is not None else sys.stdout
    out.write(prompt)
    out.flush()
    line = stream.readline()
    return line or None


def _install_completer(shell: Shell) -> None:
    """Wire tab completion into readline."""
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t\n")
    readline.parse_and_bind("tab: complete")


def run(
    *,
    config: ShellConfig | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    shell: Shell | None = None,
) -> int:
    """Run the interactive loop until ``exit`` or end of input.

    Args:
        config: Settings; ignored if *shell* is given.
        stdin: Input stream; defaults to ``sys.stdin``.
        stdout: Output stream for the banner, prompt and builtins;
            defaults to ``sys.stdout``.
        shell: A pre-built shell, mainly for tests.

    Returns:
        The process exit status (``EXIT_SUCCESS``).

    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    shell = shell if shell is not None else Shell(config=config, stdout=stdout)
    config = shell.config

    if stdin is sys.stdin and stdin.isatty():
        _install_completer(shell)

    stdout.write(format_banner(shell.builtins))
    stdout.flush()

    try:
        while True:
            line = read_line(stdin, prompt=config.prompt, out=stdout)
            if line is None and config.exit_on_eof:
                # Ctrl+D: graceful exit
                stdout.write("\n")
                break
            if shell.execute(line) is Continuation.STOP:
                break

    except KeyboardInterrupt:
        # Ctrl+C at the prompt: graceful exit
        stdout.write("\nInterrupted.\n")

    finally:
        stdout.flush()

    return EXIT_SUCCESS


def main() -> None:
    """Console-script entrypoint."""
    sys.exit(run())
