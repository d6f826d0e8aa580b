from __future__ import annotations

from podrel.core.result import Err, Ok
from podrel.services.release.semver import UNKNOWN_VERSION, SemanticVersion
from podrel.services.release.tags import highest_version, validate_bump_exceeds


def test_empty_history_is_unknown() -> None:
    assert highest_version([]) == UNKNOWN_VERSION


def test_ignores_non_version_tags() -> None:
    assert highest_version(["latest", "beta", "1.2.3", "v1"]) == SemanticVersion(1, 2, 3)


def test_single_tag() -> None:
    assert highest_version(["v0.4.2"]) == SemanticVersion(0, 4, 2)


def test_ordered_history() -> None:
    tags = ["1.0.0", "1.0.1", "1.1.0", "1.1.1"]
    assert highest_version(tags) == SemanticVersion(1, 1, 1)


def test_component_wise_maximum() -> None:
    # Neither tag is 2.9.9; minor and build are carried over from the older tag.
    assert highest_version(["2.0.5", "1.9.9"]) == SemanticVersion(2, 9, 9)


def test_component_wise_maximum_depends_on_order() -> None:
    assert highest_version(["1.9.9", "2.0.5"]) == SemanticVersion(2, 0, 5)


def test_validate_accepts_greater_build() -> None:
    result = validate_bump_exceeds(SemanticVersion(1, 0, 1), ["1.0.0"])
    assert result == Ok(SemanticVersion(1, 0, 0))


def test_validate_rejects_same_version() -> None:
    result = validate_bump_exceeds(SemanticVersion(1, 0, 0), ["1.0.0"])

    assert isinstance(result, Err)
    assert result.error.kind == "version_not_greater"
    assert "1.0.0" in result.error.message


def test_validate_rejects_lower_version() -> None:
    result = validate_bump_exceeds(SemanticVersion(0, 9, 0), ["1.0.0"])
    assert isinstance(result, Err)


def test_validate_uses_derived_maximum() -> None:
    # 2.0.6 is above every real tag but not above the derived 2.9.9.
    result = validate_bump_exceeds(SemanticVersion(2, 0, 6), ["2.0.5", "1.9.9"])
    assert isinstance(result, Err)
    assert result.error.kind == "version_not_greater"
    assert "2.9.9" in result.error.message


def test_validate_with_empty_history() -> None:
    assert validate_bump_exceeds(SemanticVersion(0, 0, 0), []) == Ok(UNKNOWN_VERSION)
