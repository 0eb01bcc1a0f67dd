"""Builtin commands — the operations that run inside the shell itself.

Only three commands are builtin:

- ``cd <path>`` — change the shell's working directory.  This cannot be
  delegated to a child process: a child changing *its* directory has no
  effect on the parent that spawned it.
- ``help`` — print a usage summary and the builtin names.
- ``exit`` — stop the read-eval loop.

Every builtin takes the shell and the full argument vector (element 0 is
the builtin's own name) and returns a ``Continuation``.  Argument
mistakes and OS errors are reported through the shell's logger and
never raised, so a builtin always hands a signal back to the loop.

The registry ``BUILTINS`` is an immutable, ordered mapping built once at
import time.  Lookup is by exact, case-sensitive name.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from sdshell.shell import Shell
    from sdshell.tokenizer import ArgumentVector


class Continuation(StrEnum):
    """Whether the main loop should read another line.

    Every executed command, builtin or external, produces one of these.
    It is the only thing that ends the loop.
    """

    CONTINUE = "continue"
    STOP = "stop"


_Operation: TypeAlias = Callable[["Shell", "ArgumentVector"], Continuation]


@dataclass(frozen=True)
class Builtin:
    """A builtin command descriptor.

    Attributes:
        name: The word that invokes the command.
        summary: One-line description shown by completion and docs.
        operation: Runs the command with the full argument vector.

    """

    name: str
    summary: str
    operation: _Operation

    def __call__(self, shell: Shell, argv: ArgumentVector) -> Continuation:
        """Run the builtin and return its continuation signal."""
        return self.operation(shell, argv)


def _cd(shell: Shell, argv: ArgumentVector) -> Continuation:
    """Change the working directory to ``argv[1]``."""
    target = argv[1]
    if target is None:
        shell.logger.error('expected argument to "cd"', source="cd")
        return Continuation.CONTINUE
    try:
        os.chdir(target)
    except OSError as e:
        shell.logger.error(f"cd: {target}: {e.strerror}", source="cd")
    except ValueError as e:
        shell.logger.error(f"cd: {target!r}: {e}", source="cd")
    else:
        shell.logger.debug(f"working directory is now {os.getcwd()}", source="cd")
    return Continuation.CONTINUE


def _help(shell: Shell, _argv: ArgumentVector) -> Continuation:
    """Print the usage summary and builtin names; arguments are ignored."""
    out = shell.stdout
    out.write("Type command name and argument(s), and hit ENTER.\n")
    out.write("The following are built in:\n")
    for name in BUILTINS:
        out.write(f"  {name}\n")
    out.write("Use the man command for information on other commands.\n")
    out.flush()
    return Continuation.CONTINUE


def _exit(_shell: Shell, _argv: ArgumentVector) -> Continuation:
    """Signal the loop to stop; arguments are ignored."""
    return Continuation.STOP


BUILTINS: Mapping[str, Builtin] = MappingProxyType(
    {
        b.name: b
        for b in (
            Builtin("cd", "change the working directory", _cd),
            Builtin("help", "show usage and the builtin commands", _help),
            Builtin("exit", "leave the shell", _exit),
        )
    }
)


def lookup(name: str) -> Builtin | None:
    """Return the builtin called exactly *name*, or ``None``."""
    return BUILTINS.get(name)
