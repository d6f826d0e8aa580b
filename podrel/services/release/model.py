from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal, get_args

if TYPE_CHECKING:
    from podrel.services.release.errors import ReleaseError
    from podrel.services.release.spec_document import SpecVersionChange


BumpPolicy = Literal["build", "minor", "major"]
BUMP_POLICIES: tuple[BumpPolicy, ...] = get_args(BumpPolicy)


def parse_bump_policy(value: str) -> BumpPolicy | None:
    v = value.strip().lower()
    for policy in BUMP_POLICIES:
        if policy == v:
            return policy
    return None


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    """Options captured once, when the orchestrator is created.

    ``bump`` stays a plain string here; it is checked against
    ``BUMP_POLICIES`` by ``ReleaseOrchestrator.create``.
    """

    spec_path: Path | None
    repo_target: str | None = None
    verbose: bool = False
    bump: str = "build"
    skip_lint: bool = False
    no_clean: bool = False
    lint_only: bool = False


class ReleaseState(Enum):
    START = "start"
    SPEC_CHECKED = "spec_checked"
    LINTED = "linted"
    VERSION_PARSED = "version_parsed"
    VERSION_VALIDATED = "version_validated"
    BACKUP_SAVED = "backup_saved"
    SPEC_PERSISTED = "spec_persisted"
    COMMITTED = "committed"
    TAGGED = "tagged"
    PUBLISHED = "published"
    CLEANED_UP = "cleaned_up"
    DONE = "done"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"
    ABORTED = "aborted"

    def __str__(self) -> str:
        return self.value


def _start_path() -> list[ReleaseState]:
    return [ReleaseState.START]


def _no_errors() -> list[ReleaseError]:
    return []


@dataclass
class ReleaseAttempt:
    """Book-keeping for one ``run()``.

    The flags record which side effects actually happened; rollback undoes
    exactly those and nothing else.
    """

    path: list[ReleaseState] = field(default_factory=_start_path)
    change: SpecVersionChange | None = None
    backup_saved: bool = False
    spec_saved: bool = False
    committed: bool = False
    tag_created: bool = False
    error: ReleaseError | None = None
    rollback_errors: list[ReleaseError] = field(default_factory=_no_errors)

    @property
    def version_string(self) -> str | None:
        return None if self.change is None else self.change.version_string

    def advance(self, state: ReleaseState) -> None:
        self.path.append(state)

    def has_side_effects(self) -> bool:
        return self.backup_saved or self.spec_saved or self.committed or self.tag_created
