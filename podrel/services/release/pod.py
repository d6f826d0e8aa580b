from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from podrel.core.result import Err, Ok, Result
from podrel.platform.process import ProcessError, ProcessRunner, SubprocessRunner
from podrel.services.release.timeouts import POD_LINT_TIMEOUT_SECONDS, POD_PUSH_TIMEOUT_SECONDS

POD_COMMAND: tuple[str, ...] = ("bundle", "exec", "pod")


@dataclass(frozen=True, slots=True)
class PodToolError:
    command: str
    message: str
    output: str | None = None
    returncode: int = 1


def lint_marker(spec_path: Path) -> str:
    """``ybs-core.podspec`` -> ``ybs-core passed validation``."""
    base = spec_path.name.split(".", 1)[0]
    return f"{base} passed validation"


def lint_passed(output: str, spec_path: Path) -> bool:
    marker = lint_marker(spec_path)
    return any(marker in line for line in output.splitlines())


class PodTool:
    """CocoaPods invoked through bundler, from the repository root."""

    def __init__(
        self,
        cwd: Path,
        *,
        runner: ProcessRunner | None = None,
        command: tuple[str, ...] = POD_COMMAND,
    ) -> None:
        self.cwd = cwd
        self._runner = runner or SubprocessRunner()
        self._command = command

    def lint(self, spec_path: Path) -> Result[str, PodToolError]:
        """Run ``pod lib lint`` and return its stdout."""
        cmd = [*self._command, "lib", "lint", str(spec_path), "--allow-warnings"]
        result = self._runner.run(cmd, self.cwd, timeout=POD_LINT_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(_tool_error("pod lib lint", result.error))
        return Ok(result.value)

    def publish(self, repo_target: str, spec_path: Path) -> Result[None, PodToolError]:
        """Run ``pod repo push <repo> <spec>``."""
        cmd = [*self._command, "repo", "push", repo_target, str(spec_path), "--allow-warnings"]
        result = self._runner.run(cmd, self.cwd, timeout=POD_PUSH_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(_tool_error("pod repo push", result.error))
        return Ok(None)


def _tool_error(command: str, e: ProcessError) -> PodToolError:
    if e.timed_out:
        message = f"{command} timed out"
    else:
        message = f"{command} failed (exit {e.returncode})"
    return PodToolError(command=command, message=message, output=e.details, returncode=e.returncode)
