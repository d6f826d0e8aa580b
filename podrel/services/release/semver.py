from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from podrel.services.release.model import BumpPolicy


_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class Comparison(Enum):
    """How another version relates to this one."""

    GREATER = "greater"
    SAME = "same"
    LOWER = "lower"


@dataclass(frozen=True, slots=True, order=True)
class SemanticVersion:
    major: int
    minor: int
    build: int

    @property
    def is_known(self) -> bool:
        return self != UNKNOWN_VERSION

    def to_string(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}"

    def __str__(self) -> str:
        return self.to_string()

    def update(self, major: int, minor: int, build: int) -> "SemanticVersion":
        return SemanticVersion(major, minor, build)

    def compare(self, other: "SemanticVersion") -> Comparison:
        """Report whether ``other`` is greater than, the same as, or lower than self.

        ``UNKNOWN_VERSION.compare(v)`` is GREATER for every real version, so
        callers holding the sentinel get a usable go/no-go answer.
        """
        if other > self:
            return Comparison.GREATER
        if other < self:
            return Comparison.LOWER
        return Comparison.SAME

    def bump(self, policy: BumpPolicy) -> "SemanticVersion":
        match policy:
            case "major":
                return SemanticVersion(self.major + 1, 0, 0)
            case "minor":
                return SemanticVersion(self.major, self.minor + 1, 0)
            case "build":
                return SemanticVersion(self.major, self.minor, self.build + 1)
            case _:
                raise AssertionError(f"unexpected bump policy: {policy}")


UNKNOWN_VERSION = SemanticVersion(-1, -1, -1)


def parse_version(text: str) -> SemanticVersion | None:
    """Find the first ``N.N.N`` in text (``v1.2.3`` and ``release-1.2.3`` match)."""
    m = _VERSION_RE.search(text)
    if m is None:
        return None
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))
