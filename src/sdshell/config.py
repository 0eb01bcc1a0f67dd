"""Shell configuration — the handful of knobs the interpreter exposes.

There is no configuration file and no environment variable lookup.
Callers build a ``ShellConfig`` (or take the defaults) and hand it to
the shell and the REPL by keyword.

Defaults:
    - **name** ``sdshell`` — prefixed to every diagnostic.
    - **prompt** ``"> "`` — printed before each read.
    - **token_capacity** ``64`` — initial slots in an argument vector.
    - **delimiters** space, tab, CR, LF and BEL — the word separators.
"""

from dataclasses import dataclass

from sdshell.logging import LogLevel

DEFAULT_NAME = "sdshell"
DEFAULT_PROMPT = "> "
DEFAULT_TOKEN_CAPACITY = 64
DEFAULT_DELIMITERS = " \t\r\n\a"


@dataclass(frozen=True)
class ShellConfig:
    """Immutable settings shared by the shell, launcher and REPL.

    Attributes:
        name: Interpreter name used as the diagnostic prefix.
        prompt: Text written before each line is read.
        token_capacity: Initial capacity of the argument vector buffer.
        delimiters: Characters that separate words on a command line.
        exit_on_eof: Stop the loop at end of input (otherwise re-prompt).
        echo_level: Minimum log level copied to the error stream.

    """

    name: str = DEFAULT_NAME
    prompt: str = DEFAULT_PROMPT
    token_capacity: int = DEFAULT_TOKEN_CAPACITY
    delimiters: str = DEFAULT_DELIMITERS
    exit_on_eof: bool = True
    echo_level: LogLevel = LogLevel.WARNING

    def __post_init__(self) -> None:
        """Reject settings the tokenizer cannot work with."""
        if self.token_capacity < 1:
            msg = f"token_capacity must be positive, got {self.token_capacity}"
            raise ValueError(msg)
        if not self.delimiters:
            msg = "delimiters must not be empty"
            raise ValueError(msg)
