"""Shared helpers for the faas test suite."""

from __future__ import annotations

import os
from pathlib import Path


def write_file(path: Path, content: str = "placeholder", mode: int | None = None) -> Path:
    """Create a file (and any missing parent dirs), return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if mode is not None:
        os.chmod(path, mode)
    return path


def tree(root: Path) -> dict[str, bytes | None]:
    """Map every entry under *root* to its content (``None`` for directories)."""
    entries: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        entries[rel] = None if path.is_dir() else path.read_bytes()
    return entries
