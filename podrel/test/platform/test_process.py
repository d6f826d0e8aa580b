"""Tests for podrel.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from podrel.core.result import Err, Ok
from podrel.platform.process import ProcessError, SubprocessRunner, run


class TestProcessError:
    def test_details_prefers_stderr(self) -> None:
        error = ProcessError(("git",), 1, stdout="out", stderr=" err \n")
        assert error.details == "err"

    def test_details_falls_back_to_stdout(self) -> None:
        error = ProcessError(("pod",), 1, stdout="[!] The spec did not pass validation", stderr="")
        assert error.details == "[!] The spec did not pass validation"

    def test_details_none_when_silent(self) -> None:
        assert ProcessError(("git",), 1, "", "  ").details is None

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "import sys; sys.exit(42)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 42
        assert not result.error.timed_out

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(1)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert "error msg" in result.error.stderr

    def test_timeout(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import time; time.sleep(10)"],
            cwd=tmp_path,
            timeout=0.1,
        )

        assert isinstance(result, Err)
        assert result.error.timed_out
        assert "timed out" in result.error.stderr.lower()


class TestSubprocessRunner:
    def test_runs_in_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "ybs-core.podspec").write_text("", encoding="utf-8")
        runner = SubprocessRunner()

        result = runner.run(
            [sys.executable, "-c", "import os; print(os.listdir('.'))"],
            tmp_path,
            timeout=10.0,
        )

        assert isinstance(result, Ok)
        assert "ybs-core.podspec" in result.value

    def test_passes_env(self, tmp_path: Path) -> None:
        import os

        env = os.environ.copy()
        env["PODREL_TEST_VAR"] = "value"
        runner = SubprocessRunner(env=env)

        result = runner.run(
            [sys.executable, "-c", "import os; print(os.environ['PODREL_TEST_VAR'])"],
            tmp_path,
        )

        assert isinstance(result, Ok)
        assert "value" in result.value
