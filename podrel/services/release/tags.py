"""Derive the highest published version from git tags.

``highest_version`` folds the tag list into a running (major, minor, build)
one component at a time. The result is a component-wise maximum and need not
be a tag that exists: ``["2.0.5", "1.9.9"]`` yields ``2.9.9``. Bumps are
validated against that value, so ``2.0.6`` is rejected there even though it
is above every real tag.
"""

from __future__ import annotations

from collections.abc import Iterable

from podrel.core.result import Err, Ok, Result
from podrel.services.release.errors import ReleaseError
from podrel.services.release.semver import (
    UNKNOWN_VERSION,
    Comparison,
    SemanticVersion,
    parse_version,
)


def highest_version(tag_names: Iterable[str]) -> SemanticVersion:
    running = UNKNOWN_VERSION
    for tag in tag_names:
        v = parse_version(tag)
        if v is None:
            continue
        if v.major > running.major:
            running = running.update(v.major, v.minor, v.build)
        if v.minor > running.minor:
            running = running.update(running.major, v.minor, v.build)
        if v.build > running.build:
            running = running.update(running.major, running.minor, v.build)
    return running


def validate_bump_exceeds(
    candidate: SemanticVersion,
    tag_names: Iterable[str],
) -> Result[SemanticVersion, ReleaseError]:
    latest = highest_version(tag_names)
    if latest.compare(candidate) != Comparison.GREATER:
        return Err(
            ReleaseError(
                kind="version_not_greater",
                message=(
                    f"pod version: {candidate} is not greater than the latest tag {latest}"
                ),
                hint="Bump the podspec version or use --bump minor/major.",
            )
        )
    return Ok(latest)
