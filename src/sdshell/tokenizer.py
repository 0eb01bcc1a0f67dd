"""Tokenizer — split a command line into an argument vector.

A command line is cut into the maximal runs of characters that are not
delimiters.  Runs of several delimiters count as one separator, and
leading or trailing delimiters produce nothing, so::

    "  ls\t -l   /tmp \n"  →  ["ls", "-l", "/tmp"]

The result is an ``ArgumentVector``: an owning, growable sequence of
words.  Element 0 is the command name.  Past the last word sits the
``SENTINEL`` (``None``), which is what an empty line's vector begins
with, and what terminates the list handed to the OS.

Growth model:
    The vector starts with ``capacity`` free slots.  When it fills up,
    capacity grows by the initial amount and the existing words are
    kept.  Capacity never shrinks, and no line is ever truncated.
"""

from __future__ import annotations

import re
import sys
from typing import TYPE_CHECKING

from sdshell.config import DEFAULT_DELIMITERS, DEFAULT_NAME, DEFAULT_TOKEN_CAPACITY

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from sdshell.logging import Logger

# Marks the end of the arguments.  An empty vector starts with it.
SENTINEL = None

EXIT_FAILURE = 1


class ArgumentVector:
    """An owning, growable, sentinel-terminated sequence of words.

    Use it as a context manager to guarantee the words are released when
    the block exits, however it exits::

        with split_line(line) as argv:
            shell.dispatch(argv)
    """

    def __init__(self, *, capacity: int = DEFAULT_TOKEN_CAPACITY) -> None:
        """Create an empty vector with *capacity* free slots.

        Raises:
            ValueError: If *capacity* is not positive.

        """
        if capacity < 1:
            msg = f"capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._increment = capacity
        self._slots: list[str | None] = [SENTINEL] * capacity
        self._count = 0

    @property
    def capacity(self) -> int:
        """Return the number of slots currently allocated."""
        return len(self._slots)

    @property
    def command(self) -> str | None:
        """Return element 0, or ``SENTINEL`` if the vector is empty."""
        return self._slots[0] if self._count else SENTINEL

    @property
    def args(self) -> list[str]:
        """Return the positional arguments (everything after element 0)."""
        return list(self)[1:]

    def append(self, token: str) -> None:
        """Store *token* after the last word, growing if full.

        Raises:
            ValueError: If *token* is empty.

        """
        if not token:
            msg = "tokens must be non-empty"
            raise ValueError(msg)
        if self._count == len(self._slots):
            self._slots.extend([SENTINEL] * self._increment)
        self._slots[self._count] = token
        self._count += 1

    def release(self) -> None:
        """Drop every word.  The vector is empty afterwards."""
        for i in range(self._count):
            self._slots[i] = SENTINEL
        self._count = 0

    def __len__(self) -> int:
        """Return the number of words (the sentinel is not counted)."""
        return self._count

    def __iter__(self) -> Iterator[str]:
        """Iterate over the words in order."""
        yield from (token for token in self._slots[: self._count] if token is not None)

    def __getitem__(self, index: int) -> str | None:
        """Return word *index*; ``len(argv)`` yields the ``SENTINEL``.

        Raises:
            IndexError: If *index* is beyond the sentinel or negative.

        """
        if not 0 <= index <= self._count:
            msg = f"argument index {index} out of range"
            raise IndexError(msg)
        return self._slots[index] if index < self._count else SENTINEL

    def __enter__(self) -> ArgumentVector:
        """Return the vector itself."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Release the words on every exit path."""
        self.release()

    def __repr__(self) -> str:
        """Show the words and the current capacity."""
        return f"ArgumentVector({list(self)!r}, capacity={self.capacity})"


def _word_pattern(delimiters: str) -> re.Pattern[str]:
    """Compile a pattern matching one maximal run of non-delimiters."""
    return re.compile(f"[^{re.escape(delimiters)}]+")


_DEFAULT_WORD = _word_pattern(DEFAULT_DELIMITERS)


def split_line(
    line: str | None,
    *,
    delimiters: str = DEFAULT_DELIMITERS,
    capacity: int = DEFAULT_TOKEN_CAPACITY,
    logger: Logger | None = None,
) -> ArgumentVector:
    """Split *line* into an argument vector.

    Args:
        line: The raw command line.  ``None`` (end of input) and blank
            lines both yield an empty vector.
        delimiters: Characters that separate words.
        capacity: Initial capacity of the returned vector.
        logger: Where to report an allocation failure.

    Returns:
        A new vector holding independent copies of every word.

    Raises:
        SystemExit: With ``EXIT_FAILURE`` if memory runs out.  The shell
            cannot hold the command at all, so it stops.

    """
    try:
        argv = ArgumentVector(capacity=capacity)
        if not line:
            return argv
        pattern = _DEFAULT_WORD if delimiters == DEFAULT_DELIMITERS else _word_pattern(delimiters)
        for match in pattern.finditer(line):
            argv.append(match.group())
    except MemoryError:
        if logger is None:
            sys.stderr.write(f"{DEFAULT_NAME}: allocation error\n")
        else:
            logger.fatal("allocation error", source="tokenizer")
        raise SystemExit(EXIT_FAILURE) from None
    return argv
