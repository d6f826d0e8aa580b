"""Podspec release: version bump, validation, publish and rollback."""

from __future__ import annotations

from podrel.services.release.errors import ReleaseError
from podrel.services.release.model import (
    BUMP_POLICIES,
    BumpPolicy,
    ReleaseAttempt,
    ReleaseOptions,
    ReleaseState,
)
from podrel.services.release.orchestrator import ReleaseOrchestrator
from podrel.services.release.semver import UNKNOWN_VERSION, Comparison, SemanticVersion
from podrel.services.release.spec_document import SpecVersionChange, parse_and_bump
from podrel.services.release.tags import highest_version, validate_bump_exceeds

__all__ = [
    "BUMP_POLICIES",
    "BumpPolicy",
    "Comparison",
    "ReleaseAttempt",
    "ReleaseError",
    "ReleaseOptions",
    "ReleaseOrchestrator",
    "ReleaseState",
    "SemanticVersion",
    "SpecVersionChange",
    "UNKNOWN_VERSION",
    "highest_version",
    "parse_and_bump",
    "validate_bump_exceeds",
]
