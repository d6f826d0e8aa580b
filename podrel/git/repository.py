"""Git repository abstraction.

The release flow only needs a handful of porcelain commands: read the tag
list, commit everything, push, and create/push/delete a tag. Each method
maps to exactly one git invocation and returns a Result.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from podrel.core.result import Err, Ok, Result
from podrel.platform.process import ProcessError, ProcessRunner, SubprocessRunner

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

DEFAULT_REMOTE = "origin"

__all__ = [
    "DEFAULT_REMOTE",
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed (without the ``git`` prefix)
        message: Error message (stderr when git produced one)
        returncode: Process return code, -1 for timeouts
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git working tree that holds the podspec.

    Attributes:
        path: Path to the repository root
    """

    def __init__(
        self,
        path: Path,
        *,
        runner: ProcessRunner | None = None,
        remote: str = DEFAULT_REMOTE,
    ) -> None:
        self.path = path
        self.remote = remote
        self._runner = runner or SubprocessRunner()

    def list_tags(self) -> Result[list[str], GitError]:
        """Return all tag names, one per line of ``git tag``."""
        result = self._run(["tag"])
        match result:
            case Err(e):
                return Err(self._error("tag", e, "git tag failed"))
            case Ok(stdout):
                return Ok([line.strip() for line in stdout.splitlines() if line.strip()])

    def commit_all(self, message: str) -> Result[None, GitError]:
        """Commit every tracked change (``git commit -a``)."""
        result = self._run(["commit", "-a", "-m", message])
        if isinstance(result, Err):
            return Err(self._error("commit -a", result.error, "git commit failed"))
        return Ok(None)

    def push_current_branch(self) -> Result[None, GitError]:
        result = self._run(["push"])
        if isinstance(result, Err):
            return Err(self._error("push", result.error, "git push failed"))
        return Ok(None)

    def create_tag(self, name: str) -> Result[None, GitError]:
        result = self._run(["tag", name])
        if isinstance(result, Err):
            return Err(self._error(f"tag {name}", result.error, "git tag failed"))
        return Ok(None)

    def push_tags(self) -> Result[None, GitError]:
        result = self._run(["push", self.remote, "--tags"])
        if isinstance(result, Err):
            return Err(self._error("push --tags", result.error, "git push --tags failed"))
        return Ok(None)

    def delete_tag_local(self, name: str) -> Result[None, GitError]:
        result = self._run(["tag", "--delete", name])
        if isinstance(result, Err):
            return Err(self._error(f"tag --delete {name}", result.error, "git tag --delete failed"))
        return Ok(None)

    def delete_tag_remote(self, name: str) -> Result[None, GitError]:
        result = self._run(["push", "--delete", self.remote, name])
        if isinstance(result, Err):
            return Err(
                self._error(f"push --delete {name}", result.error, "git push --delete failed")
            )
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return self._runner.run(["git", "-C", str(self.path), *args], self.path, timeout=timeout)

    @staticmethod
    def _error(command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.details or fallback,
            returncode=e.returncode,
        )
