from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_configuration",
    "missing_spec",
    "lint_failed",
    "no_version_found",
    "version_not_greater",
    "commit_failed",
    "tag_failed",
    "publish_failed",
    "rollback_failed",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
