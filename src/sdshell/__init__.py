"""SDSHELL — a minimal interactive Unix command interpreter.

The shell reads one line at a time, splits it into whitespace-separated
words, and either runs one of its three builtins (``cd``, ``help``,
``exit``) or launches the named program as a child process and waits
for it to finish before prompting again.

Re-exports the public symbols so callers can write::

    from sdshell import Shell, ShellConfig, split_line
"""

from sdshell.builtins import BUILTINS, Builtin, Continuation
from sdshell.config import ShellConfig
from sdshell.launcher import ChildStatus, SpawnError, spawn_and_await
from sdshell.shell import Shell
from sdshell.tokenizer import SENTINEL, ArgumentVector, split_line

__all__ = [
    "BUILTINS",
    "SENTINEL",
    "ArgumentVector",
    "Builtin",
    "ChildStatus",
    "Continuation",
    "Shell",
    "ShellConfig",
    "SpawnError",
    "spawn_and_await",
    "split_line",
]
