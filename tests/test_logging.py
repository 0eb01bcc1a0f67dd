"""Tests for the diagnostic logger.

The logger keeps an in-memory record of shell events and echoes the
serious ones to the error stream, prefixed with the shell's name.
"""

import io

import pytest

from sdshell.logging import LogEntry, Logger, LogLevel


def _quiet_logger() -> tuple[Logger, io.StringIO]:
    """Create a logger that echoes into a string buffer."""
    stream = io.StringIO()
    return Logger("sdshell", stream=stream), stream


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR < FATAL."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR
        assert LogLevel.ERROR < LogLevel.FATAL


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str(self) -> None:
        """String representation should include level, source and message."""
        entry = LogEntry(level=LogLevel.ERROR, message="no such file", source="cd")
        assert str(entry) == "[ERROR] cd: no such file"


class TestLogger:
    """Verify recording and echoing."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable in order."""
        logger, _stream = _quiet_logger()
        logger.debug("first", source="test")
        logger.info("second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_errors_are_echoed_with_prefix(self) -> None:
        """ERROR entries go to the stream prefixed with the name."""
        logger, stream = _quiet_logger()
        logger.error("cd: /nope: No such file or directory", source="cd")
        assert stream.getvalue() == "sdshell: cd: /nope: No such file or directory\n"

    def test_low_levels_are_not_echoed(self) -> None:
        """DEBUG and INFO stay in memory by default."""
        logger, stream = _quiet_logger()
        logger.debug("spawned", source="launcher")
        logger.info("killed", source="launcher")
        assert stream.getvalue() == ""

    def test_echo_level_is_configurable(self) -> None:
        """Lowering the threshold echoes DEBUG entries too."""
        stream = io.StringIO()
        logger = Logger("sdshell", stream=stream, echo_level=LogLevel.DEBUG)
        logger.debug("spawned", source="launcher")
        assert "spawned" in stream.getvalue()

    def test_default_stream_is_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without an explicit stream, echoes go to sys.stderr."""
        logger = Logger("sdshell")
        logger.fatal("allocation error", source="tokenizer")
        assert capsys.readouterr().err == "sdshell: allocation error\n"

    def test_filter_by_level_and_source(self) -> None:
        """filter() should apply both criteria."""
        logger, _stream = _quiet_logger()
        logger.debug("a", source="launcher")
        logger.error("b", source="launcher")
        logger.error("c", source="cd")
        result = logger.filter(min_level=LogLevel.ERROR, source="launcher")
        assert [e.message for e in result] == ["b"]

    def test_filter_returns_copy(self) -> None:
        """An unfiltered result must not alias the internal buffer."""
        logger, _stream = _quiet_logger()
        logger.info("a", source="test")
        logger.filter().clear()
        assert len(logger.entries) == 1

    def test_clear(self) -> None:
        """clear() should remove all entries."""
        logger, _stream = _quiet_logger()
        logger.info("a", source="test")
        logger.clear()
        assert logger.entries == []
