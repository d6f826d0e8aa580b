"""Test doubles shared by the release tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from podrel.core.result import Err, Ok, Result
from podrel.platform.process import ProcessError


def _normalize(cmd: list[str]) -> tuple[str, ...]:
    # Drop the "-C <path>" that Repository adds so tests can match on "git tag".
    if len(cmd) >= 3 and cmd[0] == "git" and cmd[1] == "-C":
        return ("git", *cmd[3:])
    return tuple(cmd)


def failure(cmd: str, *, returncode: int = 1, stderr: str = "", stdout: str = "") -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=tuple(cmd.split()),
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
    )


@dataclass
class FakeRunner:
    """ProcessRunner that records commands and replays scripted results.

    Responses are registered by command prefix; the longest matching prefix
    wins and unmatched commands succeed with empty output.
    """

    responses: dict[tuple[str, ...], Result[str, ProcessError]] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    timeouts: list[float | None] = field(default_factory=list)

    def on(self, prefix: str, result: Result[str, ProcessError]) -> FakeRunner:
        self.responses[tuple(prefix.split())] = result
        return self

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd
        key = _normalize(cmd)
        self.calls.append(key)
        self.timeouts.append(timeout)

        best: tuple[str, ...] | None = None
        for prefix in self.responses:
            if key[: len(prefix)] == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return Ok("")
        return self.responses[best]

    @property
    def commands(self) -> list[str]:
        return [" ".join(c) for c in self.calls]

    def ran(self, command: str) -> bool:
        return command in self.commands
