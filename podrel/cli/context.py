from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from podrel.core.config import CONFIG_FILENAME, PodrelConfig, load_config_if_present
from podrel.core.errors import ErrorCode
from podrel.core.result import Err
from podrel.output.console import ConsoleProtocol, RichConsole
from podrel.platform.process import ProcessRunner, SubprocessRunner


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: PodrelConfig
    console: ConsoleProtocol
    runner: ProcessRunner


def build_context(*, verbose: bool | None, config_path: Path | None) -> CLIContext:
    root = Path.cwd()
    path = config_path if config_path is not None else root / CONFIG_FILENAME

    config_result = load_config_if_present(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    return CLIContext(
        root=root,
        config=config,
        console=RichConsole(verbose=config.release.verbose if verbose is None else verbose),
        runner=SubprocessRunner(),
    )
