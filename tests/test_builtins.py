"""Tests for the builtin commands cd, help and exit.

Builtins run inside the shell process and always return a continuation
signal; their errors are reported, never raised.
"""

import io
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sdshell.builtins import BUILTINS, Continuation, lookup
from sdshell.logging import Logger, LogLevel
from sdshell.shell import Shell


def _shell() -> tuple[Shell, io.StringIO, io.StringIO]:
    """Create a shell whose output and diagnostics go to buffers."""
    out = io.StringIO()
    err = io.StringIO()
    shell = Shell(stdout=out, logger=Logger("sdshell", stream=err))
    return shell, out, err


class TestRegistry:
    """Verify the builtin registry."""

    def test_names_in_order(self) -> None:
        """The registry holds cd, help and exit, in that order."""
        assert list(BUILTINS) == ["cd", "help", "exit"]

    def test_registry_is_immutable(self) -> None:
        """Builtins cannot be added at run time."""
        with pytest.raises(TypeError):
            BUILTINS["ls"] = BUILTINS["cd"]  # type: ignore[index]

    def test_lookup_is_case_sensitive(self) -> None:
        """Only the exact name matches."""
        assert lookup("cd") is BUILTINS["cd"]
        assert lookup("CD") is None
        assert lookup("cd ") is None

    def test_every_builtin_has_a_summary(self) -> None:
        """Each descriptor carries a one-line summary."""
        assert all(b.summary for b in BUILTINS.values())


class TestCd:
    """Verify the cd builtin."""

    def test_missing_argument_is_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """cd with no argument reports an error and never calls chdir."""
        chdir = MagicMock()
        monkeypatch.setattr(os, "chdir", chdir)
        shell, _out, err = _shell()
        assert shell.execute("cd") is Continuation.CONTINUE
        chdir.assert_not_called()
        assert err.getvalue() == 'sdshell: expected argument to "cd"\n'

    def test_changes_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """cd into an existing directory changes the working directory."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sub").mkdir()
        shell, _out, err = _shell()
        assert shell.execute("cd sub") is Continuation.CONTINUE
        assert Path.cwd() == tmp_path / "sub"
        assert err.getvalue() == ""

    def test_extra_arguments_are_ignored(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Only the first argument is used."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "a").mkdir()
        shell, _out, _err = _shell()
        shell.execute("cd a b c")
        assert Path.cwd() == tmp_path / "a"

    def test_nonexistent_directory_is_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failed chdir reports the OS error and leaves cwd alone."""
        monkeypatch.chdir(tmp_path)
        shell, _out, err = _shell()
        assert shell.execute("cd missing") is Continuation.CONTINUE
        assert Path.cwd() == tmp_path
        assert err.getvalue() == "sdshell: cd: missing: No such file or directory\n"
        assert shell.logger.filter(min_level=LogLevel.ERROR, source="cd")

    def test_nul_byte_in_path_is_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A path the OS cannot represent is reported and the shell carries on."""
        monkeypatch.chdir(tmp_path)
        shell, _out, err = _shell()
        assert shell.execute("cd a\x00b\n") is Continuation.CONTINUE
        assert Path.cwd() == tmp_path
        assert err.getvalue() == "sdshell: cd: 'a\\x00b': embedded null byte\n"

    def test_file_is_not_a_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """cd onto a regular file reports 'Not a directory'."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "file").write_text("x")
        shell, _out, err = _shell()
        shell.execute("cd file")
        assert "Not a directory" in err.getvalue()


class TestHelp:
    """Verify the help builtin."""

    def test_lists_builtins(self) -> None:
        """help prints the usage line and every builtin name."""
        shell, out, _err = _shell()
        assert shell.execute("help") is Continuation.CONTINUE
        text = out.getvalue()
        assert "Type command name and argument(s)" in text
        for name in BUILTINS:
            assert f"  {name}\n" in text

    def test_ignores_arguments(self) -> None:
        """Arguments to help change nothing."""
        shell, out, err = _shell()
        shell.execute("help me please")
        plain, plain_out, _plain_err = _shell()
        plain.execute("help")
        assert out.getvalue() == plain_out.getvalue()
        assert err.getvalue() == ""


class TestExit:
    """Verify the exit builtin."""

    @pytest.mark.parametrize("line", ["exit", "exit 1", "exit now please"])
    def test_exit_stops(self, line: str) -> None:
        """exit stops the loop regardless of arguments."""
        shell, out, err = _shell()
        assert shell.execute(line) is Continuation.STOP
        assert out.getvalue() == ""
        assert err.getvalue() == ""

    def test_only_exit_stops(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """No other builtin returns STOP."""
        monkeypatch.chdir(tmp_path)
        shell, _out, _err = _shell()
        for name in BUILTINS:
            expected = Continuation.STOP if name == "exit" else Continuation.CONTINUE
            assert shell.execute(f"{name} .") is expected
