"""Filesystem helpers for the podspec and its backup copy."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "read_text", "remove_file"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``content`` through a temp file and one rename.

    Content is written as-is (``newline=""``) so line terminators survive a
    read/rewrite cycle. An existing file keeps its permission bits.
    """
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else None
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def read_text(path: Path, *, encoding: str = "utf-8") -> str:
    """Read text without newline translation."""
    with path.open("r", encoding=encoding, newline="") as handle:
        return handle.read()


def remove_file(path: Path) -> bool:
    """Delete path if it exists. Returns True if something was removed."""
    if not path.exists():
        return False
    path.unlink(missing_ok=True)
    return True
