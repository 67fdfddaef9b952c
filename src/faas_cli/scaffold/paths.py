"""Logical path helpers shared by accessors and decorators.

Accessors address entries with POSIX-style strings anchored at ``/``,
independent of the host platform.  Every path is cleaned before use so
``a/b``, ``/a/b/`` and ``/a/./b`` name the same entry and ``..`` never
climbs above the root.
"""

from __future__ import annotations

import posixpath

ROOT = "/"


def clean(path: str) -> str:
    """Return the canonical, ``/``-anchored form of *path*."""
    path = path.replace("\\", "/")
    # A single leading slash; normpath preserves a leading "//"
    return posixpath.normpath(ROOT + path.lstrip("/"))


def join(root: str, path: str) -> str:
    """Rebase logical *path* under *root*."""
    return clean(clean(root) + ROOT + clean(path).lstrip("/"))


def relative(path: str, root: str) -> str | None:
    """Strip *root* from *path*, returning a ``/``-anchored remainder.

    Returns ``None`` when *path* does not lie under *root*.
    """
    path = clean(path)
    root = clean(root)
    if root == ROOT:
        return path
    if path == root:
        return ROOT
    if path.startswith(root + "/"):
        return path[len(root):]
    return None


def parts(path: str) -> list[str]:
    """Split a logical path into its non-empty segments."""
    return [segment for segment in clean(path).split("/") if segment]


def basename(path: str) -> str:
    path = clean(path)
    return posixpath.basename(path) or ROOT
