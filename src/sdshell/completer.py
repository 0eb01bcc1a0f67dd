"""Tab completer for the interactive shell.

The completer separates **what to complete** (pure logic, testable
against a temporary directory) from **how to wire it** (readline
integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)``:

- First word: builtin names, then executables found on ``PATH``.
- After ``cd``: directories only.
- Any other argument: files and directories.
"""

from __future__ import annotations

import os
import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sdshell.shell import Shell


def _is_executable(entry: os.DirEntry[str]) -> bool:
    """Return True if *entry* is a regular file the user may execute."""
    try:
        return entry.is_file() and os.access(entry.path, os.X_OK)
    except OSError:
        return False


class Completer:
    """Complete command names and filesystem paths."""

    def __init__(self, shell: Shell, *, search_path: str | None = None) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose builtins are offered first.
            search_path: Directories to search for executables, in
                ``PATH`` format.  Defaults to ``$PATH`` at lookup time.

        """
        self._shell = shell
        self._search_path = search_path

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Builtins first, then other matches in sorted order.

        """
        words = line.split()

        # Still typing the first word → command completion
        if not words or (len(words) == 1 and not line[-1:].isspace()):
            return self._complete_commands(text)

        return self._complete_paths(text, directories_only=words[0] == "cd")

    # -- private completers ------------------------------------------------

    def _complete_commands(self, text: str) -> list[str]:
        """Complete builtin names, then executables on the search path."""
        builtins = [name for name in self._shell.builtins if name.startswith(text)]
        programs = sorted(
            {name for name in self._executables() if name.startswith(text)} - set(builtins)
        )
        return builtins + programs

    def _executables(self) -> Iterator[str]:
        """Yield the names of executables in every search directory."""
        search_path = self._search_path
        if search_path is None:
            search_path = os.environ.get("PATH", os.defpath)
        for directory in search_path.split(os.pathsep):
            try:
                with os.scandir(directory or ".") as entries:
                    yield from (e.name for e in entries if _is_executable(e))
            except OSError:
                continue

    @staticmethod
    def _complete_paths(text: str, *, directories_only: bool) -> list[str]:
        """Complete filesystem paths relative to the working directory.

        Split the partial path into a directory and a name prefix, list
        the directory, and filter by prefix.  Directories get a trailing
        ``/`` suffix.
        """
        head, prefix = os.path.split(text)
        try:
            with os.scandir(os.path.expanduser(head) or ".") as entries:
                found = list(entries)
        except OSError:
            return []

        candidates: list[str] = []
        for entry in found:
            if not entry.name.startswith(prefix):
                continue
            # Hidden entries only when asked for explicitly.
            if entry.name.startswith(".") and not prefix.startswith("."):
                continue
            is_dir = entry.is_dir()
            if directories_only and not is_dir:
                continue
            full = os.path.join(head, entry.name)
            candidates.append(full + "/" if is_dir else full)
        return sorted(candidates)
