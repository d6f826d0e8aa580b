"""Locate and rewrite the version declaration inside a podspec.

Only one shape is recognized: an optional dotted receiver, ``version``,
``=``, and a quoted ``N.N.N``::

    s.version = "1.3.6"
    spec.version      = '2.0.0'   # comment stays

Only the digits between the quotes are replaced. Everything else in the
document (other lines, their order, trailing comments, ``\\r\\n`` line
endings) is copied through unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from podrel.core.result import Err, Ok, Result
from podrel.platform.files import atomic_write_text, read_text
from podrel.services.release.errors import ReleaseError
from podrel.services.release.model import BumpPolicy
from podrel.services.release.semver import SemanticVersion

BACKUP_SUFFIX = "_old"

_VERSION_LINE_RE = re.compile(
    r"(?<![\w.])(?:\w+\.)?version\s*=\s*(?P<quote>[\"'])"
    r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<build>\d+)(?P=quote)"
)


@dataclass(frozen=True, slots=True)
class SpecVersionChange:
    target_version: SemanticVersion
    updated_document: str
    original_document: str
    previous_version: SemanticVersion

    @property
    def version_string(self) -> str:
        return self.target_version.to_string()


def parse_and_bump(
    document: str,
    policy: BumpPolicy,
    *,
    source: str = "podspec",
) -> Result[SpecVersionChange, ReleaseError]:
    lines = document.splitlines(keepends=True)
    hits: list[tuple[int, re.Match[str]]] = []
    for index, line in enumerate(lines):
        m = _VERSION_LINE_RE.search(line)
        if m is not None:
            hits.append((index, m))

    if not hits:
        return Err(
            ReleaseError(
                kind="no_version_found",
                message=f"parse {source} failed, version info not found",
                hint='Expected a line like: s.version = "1.2.3"',
            )
        )
    if len(hits) > 1:
        numbers = ", ".join(str(index + 1) for index, _ in hits)
        return Err(
            ReleaseError(
                kind="no_version_found",
                message=f"parse {source} failed, ambiguous version declarations",
                hint=f"version is declared on lines {numbers}; keep exactly one",
            )
        )

    index, m = hits[0]
    current = SemanticVersion(int(m.group("major")), int(m.group("minor")), int(m.group("build")))
    target = current.bump(policy)

    line = lines[index]
    lines[index] = line[: m.start("major")] + target.to_string() + line[m.end("build") :]

    return Ok(
        SpecVersionChange(
            target_version=target,
            updated_document="".join(lines),
            original_document=document,
            previous_version=current,
        )
    )


def backup_path(spec_path: Path) -> Path:
    return spec_path.with_name(spec_path.name + BACKUP_SUFFIX)


def read_spec(path: Path) -> Result[str, ReleaseError]:
    try:
        return Ok(read_text(path))
    except FileNotFoundError:
        return Err(ReleaseError(kind="missing_spec", message=f"podspec `{path}` not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )


def write_spec(path: Path, text: str) -> Result[None, ReleaseError]:
    try:
        atomic_write_text(path, text)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
