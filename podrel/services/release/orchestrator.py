"""Release state machine for a single podspec.

Forward path::

    START -> SPEC_CHECKED -> LINTED -> VERSION_PARSED -> VERSION_VALIDATED
          -> BACKUP_SAVED -> SPEC_PERSISTED -> COMMITTED -> TAGGED
          -> PUBLISHED -> CLEANED_UP -> DONE

Any failure from VERSION_PARSED onwards goes FAILED -> ROLLED_BACK -> ABORTED.
Each step returns a Result; the first Err stops the sequence and ``rollback``
undoes what the ``ReleaseAttempt`` says was applied. The error returned to the
caller is always the one that stopped the sequence, never a rollback error.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from podrel.core.result import Err, Ok, Result
from podrel.git.repository import GitError, Repository
from podrel.output.console import ConsoleProtocol, Style
from podrel.platform.files import remove_file
from podrel.services.release.errors import ReleaseError, ReleaseErrorKind
from podrel.services.release.model import (
    BUMP_POLICIES,
    BumpPolicy,
    ReleaseAttempt,
    ReleaseOptions,
    ReleaseState,
    parse_bump_policy,
)
from podrel.services.release.pod import PodTool, PodToolError, lint_marker, lint_passed
from podrel.services.release.spec_document import (
    SpecVersionChange,
    backup_path,
    parse_and_bump,
    read_spec,
    write_spec,
)
from podrel.services.release.tags import validate_bump_exceeds

Step: TypeAlias = Callable[[ReleaseAttempt, SpecVersionChange], Result[None, ReleaseError]]


def _git_error(kind: ReleaseErrorKind, message: str, e: GitError) -> ReleaseError:
    return ReleaseError(kind=kind, message=message, hint=e.message or None)


def _pod_error(kind: ReleaseErrorKind, e: PodToolError) -> ReleaseError:
    return ReleaseError(kind=kind, message=e.message, hint=e.output)


def _log_detail(console: ConsoleProtocol, verbose: bool, message: str) -> None:
    """Step intent: always shown when the options ask for verbose, else up to the console."""
    if verbose:
        console.print(message, Style.DIM)
    else:
        console.detail(message)


class ReleaseOrchestrator:
    def __init__(
        self,
        *,
        spec_path: Path,
        repo_target: str | None,
        bump: BumpPolicy,
        options: ReleaseOptions,
        console: ConsoleProtocol,
        git: Repository,
        pod: PodTool,
    ) -> None:
        self.spec_path = spec_path
        self.repo_target = repo_target
        self.bump = bump
        self.options = options
        self._console = console
        self._git = git
        self._pod = pod
        self.last_attempt: ReleaseAttempt | None = None

    @classmethod
    def create(
        cls,
        options: ReleaseOptions,
        *,
        console: ConsoleProtocol,
        git: Repository,
        pod: PodTool,
    ) -> Result[ReleaseOrchestrator, ReleaseError]:
        if options.spec_path is None or not str(options.spec_path).strip():
            return Err(
                ReleaseError(
                    kind="invalid_configuration",
                    message="no podspec specified",
                    hint="Pass --spec or set PODREL_SPEC.",
                )
            )

        if not options.lint_only and not (options.repo_target or "").strip():
            return Err(
                ReleaseError(
                    kind="invalid_configuration",
                    message="no pod repo specified",
                    hint="Pass --repo or set PODREL_REPO.",
                )
            )

        bump = parse_bump_policy(options.bump)
        if bump is None:
            return Err(
                ReleaseError(
                    kind="invalid_configuration",
                    message=f"invalid bump policy {options.bump!r}",
                    hint=f"Expected one of: {', '.join(BUMP_POLICIES)}",
                )
            )

        if options.lint_only:
            _log_detail(
                console,
                options.verbose,
                f"initialize...\n\tpodspec = {options.spec_path}\n\tlint only",
            )
        else:
            _log_detail(
                console,
                options.verbose,
                f"initialize...\n\tpodspec = {options.spec_path}"
                f"\n\tpodrepo = {options.repo_target}\n\tbump = {bump}"
            )

        return Ok(
            cls(
                spec_path=options.spec_path,
                repo_target=options.repo_target,
                bump=bump,
                options=options,
                console=console,
                git=git,
                pod=pod,
            )
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def lint(self) -> Result[None, ReleaseError]:
        exists = self._check_spec_exists()
        if isinstance(exists, Err):
            return exists
        return self._lint()

    def run(self) -> Result[str | None, ReleaseError]:
        """Release the podspec. Ok carries the published version, or None in lint-only mode."""
        attempt = ReleaseAttempt()
        self.last_attempt = attempt

        exists = self._check_spec_exists()
        if isinstance(exists, Err):
            return self._abort(attempt, exists.error)
        attempt.advance(ReleaseState.SPEC_CHECKED)

        if self.options.skip_lint:
            self._detail("skipping pod lib lint")
        else:
            linted = self._lint()
            if isinstance(linted, Err):
                return self._abort(attempt, linted.error)
        attempt.advance(ReleaseState.LINTED)

        if self.options.lint_only:
            self._console.success("lib linted ok")
            attempt.advance(ReleaseState.DONE)
            return Ok(None)

        parsed = self._parse_spec()
        if isinstance(parsed, Err):
            return self._fail(attempt, parsed.error)
        change = parsed.value
        attempt.change = change
        attempt.advance(ReleaseState.VERSION_PARSED)
        self._log_plan(change)

        steps: tuple[Step, ...] = (
            self._validate_version,
            self._save_backup,
            self._persist_spec,
            self._commit,
            self._tag,
            self._publish,
        )
        for step in steps:
            result = step(attempt, change)
            if isinstance(result, Err):
                return self._fail(attempt, result.error)

        self._cleanup(attempt)
        attempt.advance(ReleaseState.DONE)
        self._console.success(f"pod version {change.version_string} published OK")
        return Ok(change.version_string)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _detail(self, message: str) -> None:
        _log_detail(self._console, self.options.verbose, message)

    def _log_plan(self, change: SpecVersionChange) -> None:
        self._detail(
            "creating pod:"
            f"\n\tpodspec = {self.spec_path}"
            f"\n\tpodrepo = {self.repo_target}"
            f"\n\tversion = {change.version_string}"
            f"\n\tskip_lint = {self.options.skip_lint}"
            f"\n\tno_clean = {self.options.no_clean}"
        )

    def _check_spec_exists(self) -> Result[None, ReleaseError]:
        if not self.spec_path.is_file():
            return Err(
                ReleaseError(
                    kind="missing_spec",
                    message=f"podspec `{self.spec_path}` not found",
                )
            )
        return Ok(None)

    def _lint(self) -> Result[None, ReleaseError]:
        self._detail("linting pod locally")
        result = self._pod.lint(self.spec_path).map_err(lambda e: _pod_error("lint_failed", e))
        if isinstance(result, Err):
            return result
        if not lint_passed(result.value, self.spec_path):
            return Err(
                ReleaseError(
                    kind="lint_failed",
                    message="pod lib lint failed",
                    hint=f"output did not contain '{lint_marker(self.spec_path)}'",
                )
            )
        return Ok(None)

    def _parse_spec(self) -> Result[SpecVersionChange, ReleaseError]:
        text = read_spec(self.spec_path)
        if isinstance(text, Err):
            return text
        parsed = parse_and_bump(text.value, self.bump, source=self.spec_path.name)
        if isinstance(parsed, Ok):
            self._detail(f"located podspec version = {parsed.value.previous_version}")
            self._detail(f"updated podspec version = {parsed.value.target_version}")
        return parsed

    def _validate_version(
        self, attempt: ReleaseAttempt, change: SpecVersionChange
    ) -> Result[None, ReleaseError]:
        self._detail("checking version bump ok")
        tags = self._git.list_tags()
        if isinstance(tags, Err):
            return Err(_git_error("tag_failed", "failed to list git tags", tags.error))

        valid = validate_bump_exceeds(change.target_version, tags.value)
        if isinstance(valid, Err):
            return valid
        latest = valid.value
        if latest.is_known:
            self._detail(f"highest tagged version = {latest}")
        else:
            self._detail("no version tags yet")
        attempt.advance(ReleaseState.VERSION_VALIDATED)
        return Ok(None)

    def _save_backup(
        self, attempt: ReleaseAttempt, change: SpecVersionChange
    ) -> Result[None, ReleaseError]:
        path = backup_path(self.spec_path)
        self._detail(f"saving original podspec to {path}")
        written = write_spec(path, change.original_document)
        if isinstance(written, Err):
            return written
        attempt.backup_saved = True
        attempt.advance(ReleaseState.BACKUP_SAVED)
        return Ok(None)

    def _persist_spec(
        self, attempt: ReleaseAttempt, change: SpecVersionChange
    ) -> Result[None, ReleaseError]:
        self._detail(f"saving new podspec to {self.spec_path}")
        written = write_spec(self.spec_path, change.updated_document)
        if isinstance(written, Err):
            return written
        attempt.spec_saved = True
        attempt.advance(ReleaseState.SPEC_PERSISTED)
        return Ok(None)

    def _commit(
        self, attempt: ReleaseAttempt, change: SpecVersionChange
    ) -> Result[None, ReleaseError]:
        message = f"commit podspec revision: {change.version_string}"
        self._detail(message)

        commit = self._git.commit_all(message)
        if isinstance(commit, Err):
            return Err(
                _git_error(
                    "commit_failed", f"git commit failed for {change.version_string}", commit.error
                )
            )
        attempt.committed = True

        push = self._git.push_current_branch()
        if isinstance(push, Err):
            return Err(
                _git_error(
                    "commit_failed", f"git push failed for {change.version_string}", push.error
                )
            )
        attempt.advance(ReleaseState.COMMITTED)
        return Ok(None)

    def _tag(self, attempt: ReleaseAttempt, change: SpecVersionChange) -> Result[None, ReleaseError]:
        tag = change.version_string
        self._detail(f"creating new tag: {tag}")

        created = self._git.create_tag(tag)
        if isinstance(created, Err):
            return Err(_git_error("tag_failed", f"git tag {tag} failed", created.error))
        attempt.tag_created = True

        pushed = self._git.push_tags()
        if isinstance(pushed, Err):
            return Err(_git_error("tag_failed", f"pushing tag {tag} failed", pushed.error))
        attempt.advance(ReleaseState.TAGGED)
        return Ok(None)

    def _publish(
        self, attempt: ReleaseAttempt, change: SpecVersionChange
    ) -> Result[None, ReleaseError]:
        assert self.repo_target is not None
        self._detail(f"publishing pod repo={self.repo_target} spec={self.spec_path}")
        published = self._pod.publish(self.repo_target, self.spec_path)
        if isinstance(published, Err):
            e = published.error
            return Err(
                ReleaseError(
                    kind="publish_failed",
                    message=f"{e.message} while publishing {change.version_string}",
                    hint=e.output,
                )
            )
        attempt.advance(ReleaseState.PUBLISHED)
        return Ok(None)

    def _cleanup(self, attempt: ReleaseAttempt) -> None:
        if self.options.no_clean:
            self._detail("no_clean set. Skipping clean up step")
            return

        self._detail("tidying up old files")
        path = backup_path(self.spec_path)
        try:
            remove_file(path)
        except OSError as e:
            # The pod is already published; a stale backup is reported, not rolled back.
            self._console.warning(f"could not remove {path}: {e}")
            return
        attempt.advance(ReleaseState.CLEANED_UP)

    # ------------------------------------------------------------------
    # Failure handling
    # ------------------------------------------------------------------

    def _abort(
        self, attempt: ReleaseAttempt, error: ReleaseError
    ) -> Result[str | None, ReleaseError]:
        """Failure before any durable change: nothing to roll back."""
        attempt.error = error
        attempt.advance(ReleaseState.FAILED)
        attempt.advance(ReleaseState.ABORTED)
        return Err(error)

    def _fail(
        self, attempt: ReleaseAttempt, error: ReleaseError
    ) -> Result[str | None, ReleaseError]:
        attempt.error = error
        attempt.advance(ReleaseState.FAILED)
        self._detail(f"pod release failed at {attempt.path[-2]}: {error.message}")

        if self.options.no_clean:
            self._detail("no_clean set. Skipping rollback")
        else:
            if attempt.has_side_effects():
                self._detail("rolling back changes")
                self.rollback(attempt)
            else:
                self._detail("nothing to roll back")
            attempt.advance(ReleaseState.ROLLED_BACK)

        attempt.advance(ReleaseState.ABORTED)
        return Err(error)

    def rollback(self, attempt: ReleaseAttempt) -> list[ReleaseError]:
        """Undo the side effects recorded on ``attempt``.

        Every step is attempted even if an earlier one fails. Failures are
        logged as warnings and stored on ``attempt.rollback_errors``.
        """
        errors: list[ReleaseError] = []
        change = attempt.change
        version = attempt.version_string or "unknown version"

        if attempt.spec_saved and change is not None:
            self._detail(f"restoring {self.spec_path}")
            restored = write_spec(self.spec_path, change.original_document)
            if isinstance(restored, Err):
                errors.append(
                    self._rollback_error(f"restore {self.spec_path.name}", restored.error.message)
                )

        if attempt.backup_saved:
            path = backup_path(self.spec_path)
            try:
                remove_file(path)
            except OSError as e:
                errors.append(
                    ReleaseError(kind="rollback_failed", message=f"could not remove {path}: {e}")
                )

        if attempt.committed:
            message = f"reverting back from {version}"
            self._detail(message)
            commit = self._git.commit_all(message)
            if isinstance(commit, Err):
                errors.append(
                    self._rollback_error("revert commit", commit.error.message)
                )
            push = self._git.push_current_branch()
            if isinstance(push, Err):
                errors.append(
                    self._rollback_error("revert push", push.error.message)
                )

        if attempt.tag_created and change is not None:
            tag = change.version_string
            self._detail(f"deleting tag {tag}")
            remote = self._git.delete_tag_remote(tag)
            if isinstance(remote, Err):
                errors.append(
                    self._rollback_error(f"delete remote tag {tag}", remote.error.message)
                )
            local = self._git.delete_tag_local(tag)
            if isinstance(local, Err):
                errors.append(
                    self._rollback_error(f"delete local tag {tag}", local.error.message)
                )

        for e in errors:
            self._console.warning(e.pretty())
        attempt.rollback_errors.extend(errors)
        return errors

    @staticmethod
    def _rollback_error(action: str, detail: str | None) -> ReleaseError:
        return ReleaseError(
            kind="rollback_failed",
            message=f"rollback step failed: {action}",
            hint=detail or None,
        )
