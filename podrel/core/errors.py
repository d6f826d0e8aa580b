"""Error codes for CLI exit status.

Every release failure kind maps onto one of these codes so that the hosting
automation (CI job, Fastfile, Makefile) can tell a bad invocation apart from
a failed publish without parsing output.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad options, invalid bump policy)
    - 2: Environment error (podspec not found)
    - 3: Lint error (pod lib lint did not pass)
    - 4: Release error (version, commit, tag or publish step failed)
    - 5: I/O error (podspec or backup could not be read/written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    LINT_ERROR = 3
    RELEASE_ERROR = 4
    IO_ERROR = 5
