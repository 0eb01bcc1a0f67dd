"""Diagnostic logging for the shell.

Every complaint the shell makes (a missing ``cd`` argument, a failed
directory change, a failed spawn) goes through one ``Logger``.  The
logger keeps an in-memory record of what happened and copies anything
serious enough to the error stream, prefixed with the interpreter name:

    sdshell: cd: /nope: No such file or directory

- **LogLevel** — severity levels ordered for filtering (DEBUG < FATAL).
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — an append-only log with an error-stream sink, filtering
  and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Echo threshold, not handlers.**  Low-level entries (child pids,
      exit statuses) are kept for inspection only; the user sees
      WARNING and above unless the threshold is lowered.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import TextIO


class LogLevel(IntEnum):
    """Severity levels for log entries.

    FATAL is reserved for conditions after which the interpreter cannot
    continue (it cannot even hold the user's command).
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "launcher").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with an error-stream sink.

    Args:
        name: Prefix written before each echoed message.
        stream: Where echoed messages go.  ``None`` means the current
            ``sys.stderr``, looked up at write time so that redirected
            or captured streams are honoured.
        echo_level: Entries at or above this level are echoed.

    """

    def __init__(
        self,
        name: str,
        *,
        stream: TextIO | None = None,
        echo_level: LogLevel = LogLevel.WARNING,
    ) -> None:
        """Create an empty logger."""
        self._name = name
        self._stream = stream
        self._echo_level = echo_level
        self._entries: list[LogEntry] = []

    @property
    def name(self) -> str:
        """Return the prefix used for echoed messages."""
        return self._name

    @property
    def stream(self) -> TextIO:
        """Return the stream echoed messages are written to."""
        return self._stream if self._stream is not None else sys.stderr

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry, echoing it if it is severe enough.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source))
        if level >= self._echo_level:
            stream = self.stream
            stream.write(f"{self._name}: {message}\n")
            stream.flush()

    def debug(self, message: str, *, source: str) -> None:
        """Log at DEBUG level."""
        self.log(LogLevel.DEBUG, message, source=source)

    def info(self, message: str, *, source: str) -> None:
        """Log at INFO level."""
        self.log(LogLevel.INFO, message, source=source)

    def error(self, message: str, *, source: str) -> None:
        """Log at ERROR level."""
        self.log(LogLevel.ERROR, message, source=source)

    def fatal(self, message: str, *, source: str) -> None:
        """Log at FATAL level."""
        self.log(LogLevel.FATAL, message, source=source)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
