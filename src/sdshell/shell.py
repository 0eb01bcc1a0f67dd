"""The shell — command dispatcher for the interpreter.

The shell takes one command line, splits it into an argument vector,
and decides what runs it:

1. An empty vector (blank line) does nothing.
2. A name found in the builtin registry runs in-process.
3. Anything else is launched as an external program, and the shell
   waits for it to terminate.

Every path returns a ``Continuation``; only ``exit`` returns ``STOP``.

Design choices:
    - **Writes, does not return, output.**  External programs write
      straight to the inherited terminal, so builtins do the same
      through ``shell.stdout`` and diagnostics go through the logger.
      Tests pass in ``io.StringIO`` streams.
    - **The vector is released on every path.**  ``execute()`` scopes
      each vector to a ``with`` block, so nothing from one line
      survives into the next.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from sdshell.builtins import BUILTINS, Builtin, Continuation, lookup
from sdshell.config import ShellConfig
from sdshell.launcher import SpawnError, spawn_and_await
from sdshell.logging import Logger
from sdshell.tokenizer import split_line

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sdshell.tokenizer import ArgumentVector


class Shell:
    """Dispatch argument vectors to builtins or external programs."""

    def __init__(
        self,
        *,
        config: ShellConfig | None = None,
        stdout: TextIO | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a shell.

        Args:
            config: Settings; defaults to ``ShellConfig()``.
            stdout: Stream for builtin output; defaults to ``sys.stdout``
                at write time.
            logger: Diagnostic sink; defaults to a logger named after
                ``config.name`` that echoes to ``sys.stderr``.

        """
        self._config = config if config is not None else ShellConfig()
        self._stdout = stdout
        self._logger = (
            logger
            if logger is not None
            else Logger(self._config.name, echo_level=self._config.echo_level)
        )

    @property
    def config(self) -> ShellConfig:
        """Return the shell's settings."""
        return self._config

    @property
    def stdout(self) -> TextIO:
        """Return the stream builtins write to."""
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def logger(self) -> Logger:
        """Return the diagnostic logger."""
        return self._logger

    @property
    def builtins(self) -> Mapping[str, Builtin]:
        """Return the builtin registry."""
        return BUILTINS

    def tokenize(self, line: str | None) -> ArgumentVector:
        """Split *line* using the configured delimiters and capacity."""
        return split_line(
            line,
            delimiters=self._config.delimiters,
            capacity=self._config.token_capacity,
            logger=self._logger,
        )

    def execute(self, line: str | None) -> Continuation:
        """Tokenize and dispatch one command line.

        Args:
            line: The raw line, or ``None`` at end of input.

        Returns:
            The continuation signal of whatever ran.

        """
        with self.tokenize(line) as argv:
            return self.dispatch(argv)

    def dispatch(self, argv: ArgumentVector) -> Continuation:
        """Run a builtin or launch an external program for *argv*."""
        name = argv.command
        if name is None:
            return Continuation.CONTINUE

        builtin = lookup(name)
        if builtin is not None:
            self._logger.debug(f"builtin {name}", source="shell")
            return builtin(self, argv)

        return self.launch(argv)

    def launch(self, argv: ArgumentVector) -> Continuation:
        """Spawn ``argv[0]`` and block until it terminates."""
        try:
            spawn_and_await(list(argv), logger=self._logger)
        except SpawnError as e:
            self._logger.error(str(e), source="shell")
        return Continuation.CONTINUE
