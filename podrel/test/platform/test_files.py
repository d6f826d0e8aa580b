"""Tests for podrel.platform.files module."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from podrel.platform.files import atomic_write_text, read_text, remove_file


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_atomic_write_keeps_permissions(tmp_path: Path) -> None:
    path = tmp_path / "a.podspec"
    path.write_text("old", encoding="utf-8")
    path.chmod(0o755)

    atomic_write_text(path, "new")

    assert stat.S_IMODE(path.stat().st_mode) == 0o755
    assert path.read_text(encoding="utf-8") == "new"


def test_atomic_write_leaves_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "a.podspec"
    atomic_write_text(path, "one")
    atomic_write_text(path, "two")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.podspec"]
    assert read_text(path) == "two"


def test_crlf_survives_write_and_read(tmp_path: Path) -> None:
    path = tmp_path / "a.podspec"
    text = 'Pod::Spec.new do |s|\r\n  s.version = "1.0.0"\r\nend\r\n'
    atomic_write_text(path, text)
    assert read_text(path) == text
    assert path.read_bytes() == text.encode("utf-8")


def test_remove_file_is_idempotent(tmp_path: Path) -> None:
    path = tmp_path / "a.podspec_old"
    path.write_text("x", encoding="utf-8")

    assert remove_file(path) is True
    assert not path.exists()
    assert remove_file(path) is False
