"""Subprocess execution with Result-based error handling.

Git, ``pod lib lint`` and ``pod repo push`` are all reached through the
``ProcessRunner`` protocol so that tests can substitute a fake that records
commands instead of touching a real repository or spec repo.

Usage:
    runner = SubprocessRunner()
    match runner.run(["git", "tag"], cwd=Path("."), timeout=30.0):
        case Ok(stdout):
            print(stdout.splitlines())
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from podrel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "ProcessRunner", "SubprocessRunner", "run"]

# Returned for anything that never produced an exit status.
NO_EXIT_STATUS = -1
_TIMEOUT_PREFIX = "Command timed out"


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out, or could not be started.

    The last two carry ``returncode=NO_EXIT_STATUS`` and put the reason in
    ``stderr``, so callers handle all three the same way.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def timed_out(self) -> bool:
        return self.returncode == NO_EXIT_STATUS and self.stderr.startswith(_TIMEOUT_PREFIX)

    @property
    def details(self) -> str | None:
        """Best available diagnostic text, or None if the process said nothing."""
        return self.stderr.strip() or self.stdout.strip() or None


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and capture its output.

    Returns Ok(stdout) on exit status 0, Err(ProcessError) otherwise.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        # Partial output may come back as bytes even with text=True.
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(
            ProcessError(command, NO_EXIT_STATUS, partial, f"{_TIMEOUT_PREFIX} after {timeout}s")
        )
    except OSError as e:
        return Err(ProcessError(command, NO_EXIT_STATUS, "", str(e)))

    if proc.returncode == 0:
        return Ok(proc.stdout)
    return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))


class ProcessRunner(Protocol):
    """Capability to run an external tool and capture its output."""

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]: ...


class SubprocessRunner:
    """ProcessRunner backed by :func:`run`."""

    def __init__(self, env: dict[str, str] | None = None) -> None:
        self._env = env

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return run(cmd, cwd, self._env, timeout=timeout)
