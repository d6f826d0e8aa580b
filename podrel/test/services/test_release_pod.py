from __future__ import annotations

from pathlib import Path

from podrel.core.result import Err, Ok
from podrel.services.release.pod import PodTool, lint_marker, lint_passed
from podrel.services.release.timeouts import POD_LINT_TIMEOUT_SECONDS, POD_PUSH_TIMEOUT_SECONDS
from podrel.test.fakes import FakeRunner, failure

LINT_OK = """\
 -> ybs-core (1.3.6)
    - NOTE  | xcodebuild:  note: Using new build system

ybs-core passed validation.
"""


def test_lint_marker_uses_name_before_first_dot() -> None:
    assert lint_marker(Path("ybs-core.podspec")) == "ybs-core passed validation"
    assert lint_marker(Path("specs/YBS.Core.podspec")) == "YBS passed validation"


def test_lint_passed() -> None:
    assert lint_passed(LINT_OK, Path("ybs-core.podspec"))
    assert not lint_passed(LINT_OK, Path("other.podspec"))
    assert not lint_passed("", Path("ybs-core.podspec"))


def test_lint_command(tmp_path: Path) -> None:
    runner = FakeRunner().on("bundle exec pod lib lint", Ok(LINT_OK))
    tool = PodTool(tmp_path, runner=runner)

    result = tool.lint(Path("ybs-core.podspec"))

    assert result == Ok(LINT_OK)
    assert runner.commands == ["bundle exec pod lib lint ybs-core.podspec --allow-warnings"]
    assert runner.timeouts == [POD_LINT_TIMEOUT_SECONDS]


def test_lint_failure_keeps_output(tmp_path: Path) -> None:
    runner = FakeRunner().on(
        "bundle exec pod lib lint",
        failure("pod lib lint", stdout="[!] ybs-core did not pass validation"),
    )

    result = PodTool(tmp_path, runner=runner).lint(Path("ybs-core.podspec"))

    assert isinstance(result, Err)
    assert result.error.message == "pod lib lint failed (exit 1)"
    assert result.error.output == "[!] ybs-core did not pass validation"


def test_publish_command(tmp_path: Path) -> None:
    runner = FakeRunner()
    tool = PodTool(tmp_path, runner=runner)

    assert tool.publish("ybs-specs", Path("ybs-core.podspec")) == Ok(None)
    assert runner.commands == [
        "bundle exec pod repo push ybs-specs ybs-core.podspec --allow-warnings"
    ]
    assert runner.timeouts == [POD_PUSH_TIMEOUT_SECONDS]


def test_publish_timeout(tmp_path: Path) -> None:
    runner = FakeRunner().on(
        "bundle exec pod repo push",
        failure("pod repo push", returncode=-1, stderr="Command timed out after 1800.0s"),
    )

    result = PodTool(tmp_path, runner=runner).publish("ybs-specs", Path("a.podspec"))

    assert isinstance(result, Err)
    assert result.error.message == "pod repo push timed out"


def test_custom_command_prefix(tmp_path: Path) -> None:
    runner = FakeRunner()
    PodTool(tmp_path, runner=runner, command=("pod",)).lint(Path("a.podspec"))
    assert runner.commands == ["pod lib lint a.podspec --allow-warnings"]
