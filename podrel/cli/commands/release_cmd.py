from __future__ import annotations

from pathlib import Path

import typer

from podrel.cli.commands._helpers import exit_on_error
from podrel.cli.context import CLIContext, build_context
from podrel.core.result import Result
from podrel.git.repository import Repository
from podrel.services.release.errors import ReleaseError
from podrel.services.release.model import ReleaseOptions
from podrel.services.release.orchestrator import ReleaseOrchestrator
from podrel.services.release.pod import PodTool


def _orchestrator(
    ctx: CLIContext, options: ReleaseOptions
) -> Result[ReleaseOrchestrator, ReleaseError]:
    return ReleaseOrchestrator.create(
        options,
        console=ctx.console,
        git=Repository(ctx.root, runner=ctx.runner),
        pod=PodTool(ctx.root, runner=ctx.runner),
    )


def _spec_path(spec: Path | None, ctx: CLIContext) -> Path | None:
    if spec is not None:
        return spec
    if ctx.config.release.spec is not None:
        return Path(ctx.config.release.spec)
    return None


def _flag(value: bool | None, default: bool) -> bool:
    """An explicit flag or env var wins over podrel.toml."""
    return default if value is None else value


def release(
    spec: Path | None = typer.Option(
        None, "--spec", "-s", envvar="PODREL_SPEC", help="Podspec file, e.g. ybs-core.podspec"
    ),
    repo: str | None = typer.Option(
        None, "--repo", "-r", envvar="PODREL_REPO", help="Spec repo to push to"
    ),
    bump: str | None = typer.Option(
        None, "--bump", "-b", envvar="PODREL_BUMP", help="build | minor | major (default: build)"
    ),
    skip_lint: bool | None = typer.Option(
        None,
        "--skip-lint/--no-skip-lint",
        envvar="PODREL_SKIP_LINT",
        help="Do not run pod lib lint first",
        show_default=False,
    ),
    no_clean: bool | None = typer.Option(
        None,
        "--no-clean/--clean",
        envvar="PODREL_NO_CLEAN",
        help="Keep the backup podspec and skip rollback on failure",
        show_default=False,
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose/--quiet",
        "-v",
        envvar="PODREL_VERBOSE",
        help="Report every step",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(None, "--config", help="Path to podrel.toml"),
) -> None:
    """Bump the podspec version, tag it and push it to the spec repo."""
    ctx = build_context(verbose=verbose, config_path=config_path)
    defaults = ctx.config.release

    options = ReleaseOptions(
        spec_path=_spec_path(spec, ctx),
        repo_target=repo or defaults.repo,
        verbose=ctx.console.verbose,
        bump=bump or defaults.bump,
        skip_lint=_flag(skip_lint, defaults.skip_lint),
        no_clean=_flag(no_clean, defaults.no_clean),
    )
    created = _orchestrator(ctx, options)
    exit_on_error(created, ctx.console)
    orchestrator = created.unwrap()

    result = orchestrator.run()
    exit_on_error(result, ctx.console)


def lint(
    spec: Path | None = typer.Option(
        None, "--spec", "-s", envvar="PODREL_SPEC", help="Podspec file, e.g. ybs-core.podspec"
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose/--quiet",
        "-v",
        envvar="PODREL_VERBOSE",
        help="Report every step",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(None, "--config", help="Path to podrel.toml"),
) -> None:
    """Run pod lib lint on the podspec without publishing anything."""
    ctx = build_context(verbose=verbose, config_path=config_path)

    options = ReleaseOptions(
        spec_path=_spec_path(spec, ctx),
        verbose=ctx.console.verbose,
        lint_only=True,
    )
    created = _orchestrator(ctx, options)
    exit_on_error(created, ctx.console)
    orchestrator = created.unwrap()

    result = orchestrator.lint()
    exit_on_error(result, ctx.console)
    ctx.console.success("lib linted ok")
