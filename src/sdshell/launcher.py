"""Launcher — spawn an external program and wait for it to terminate.

Running a program takes three system calls:

1. ``fork()`` copies the shell into a new child process.
2. ``execvp()`` (in the child) replaces that copy with the requested
   program, searching ``PATH`` for it.  Argument zero is the command
   name as the user typed it.
3. ``waitpid()`` (in the parent) blocks until that child terminates.

The two ways this can fail are kept apart:

- **fork fails** (out of processes or memory): there is no child.  The
  parent gets a ``SpawnError`` and nothing else happens.
- **exec fails** (unknown command, not executable): the child exists.
  It reports the error itself and exits with ``EXIT_FAILURE``.  The
  parent only sees an ordinary exit status.

A child that is merely *stopped* (``SIGTSTP``, ``SIGSTOP``) has not
terminated, so the parent keeps waiting on it.  There is never more
than one child outstanding.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sdshell.logging import Logger

EXIT_FAILURE = 1


class SpawnError(Exception):
    """Raised when the OS refuses to create a child process."""


@dataclass(frozen=True)
class ChildStatus:
    """How a child process terminated.

    Exactly one of ``exit_code`` and ``term_signal`` is set.

    Attributes:
        pid: The child's process id.
        exit_code: Exit status if the child exited normally.
        term_signal: Signal number if the child was killed by a signal.

    """

    pid: int
    exit_code: int | None = None
    term_signal: int | None = None

    @classmethod
    def from_wait_status(cls, pid: int, status: int) -> ChildStatus | None:
        """Decode a ``waitpid`` status, or ``None`` if not terminated."""
        if os.WIFEXITED(status):
            return cls(pid=pid, exit_code=os.WEXITSTATUS(status))
        if os.WIFSIGNALED(status):
            return cls(pid=pid, term_signal=os.WTERMSIG(status))
        return None


def _exec_child(argv: Sequence[str], logger: Logger) -> None:
    """Replace the child's image with ``argv[0]``.  Never returns."""
    try:
        os.execvp(argv[0], list(argv))
    except OSError as e:
        logger.error(f"{argv[0]}: {e.strerror}", source="launcher")
    except ValueError as e:
        logger.error(f"{argv[0]}: {e}", source="launcher")
    finally:
        os._exit(EXIT_FAILURE)


def _await(pid: int, logger: Logger) -> ChildStatus:
    """Block until child *pid* has exited or been killed."""
    while True:
        try:
            _, status = os.waitpid(pid, os.WUNTRACED)
        except KeyboardInterrupt:
            # The terminal delivered the interrupt to the child as well.
            continue
        result = ChildStatus.from_wait_status(pid, status)
        if result is not None:
            return result
        if os.WIFSTOPPED(status):
            logger.debug(
                f"pid {pid} stopped by signal {os.WSTOPSIG(status)}, still waiting",
                source="launcher",
            )


def spawn_and_await(argv: Sequence[str], *, logger: Logger) -> ChildStatus:
    """Run ``argv[0]`` with arguments ``argv`` and wait for it.

    The child inherits the shell's standard streams and working
    directory.  Pending output is flushed first so it is not written
    twice or out of order.

    Args:
        argv: Command name followed by its arguments (non-empty).
        logger: Receives diagnostics from both parent and child.

    Returns:
        The child's termination status.

    Raises:
        SpawnError: If the child process could not be created.
        ValueError: If *argv* is empty.

    """
    if not argv:
        msg = "cannot launch an empty command"
        raise ValueError(msg)

    sys.stdout.flush()
    sys.stderr.flush()
    try:
        pid = os.fork()
    except OSError as e:
        msg = f"{argv[0]}: {e.strerror}"
        raise SpawnError(msg) from e

    if pid == 0:
        _exec_child(argv, logger)

    logger.debug(f"spawned {argv[0]} as pid {pid}", source="launcher")
    result = _await(pid, logger)
    if result.term_signal is not None:
        logger.info(f"pid {pid} killed by signal {result.term_signal}", source="launcher")
    else:
        logger.debug(f"pid {pid} exited with status {result.exit_code}", source="launcher")
    return result
