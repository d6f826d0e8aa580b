"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn, TypeVar

import typer

from podrel.core.errors import ErrorCode
from podrel.core.result import Err, Result
from podrel.output.console import ConsoleProtocol, Style
from podrel.services.release.errors import ReleaseError, ReleaseErrorKind

T = TypeVar("T")

_EXIT_CODES: dict[ReleaseErrorKind, ErrorCode] = {
    "invalid_configuration": ErrorCode.USER_ERROR,
    "missing_spec": ErrorCode.ENV_ERROR,
    "lint_failed": ErrorCode.LINT_ERROR,
    "io_failed": ErrorCode.IO_ERROR,
}


def exit_code_for(error: ReleaseError) -> ErrorCode:
    return _EXIT_CODES.get(error.kind, ErrorCode.RELEASE_ERROR)


def exit_on_error(result: Result[T, ReleaseError], console: ConsoleProtocol) -> None:
    """Print the error and exit with its code if result is Err, otherwise return."""
    if isinstance(result, Err):
        error = result.error
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        exit_with_code(int(exit_code_for(error)))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
