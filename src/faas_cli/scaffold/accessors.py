"""Source accessors: uniform read access to template trees.

An accessor exposes exactly three operations over a ``/``-anchored logical
path space:

- ``stat(path)``  -- metadata for one entry
- ``open(path)``  -- binary read stream for one file
- ``walk(path)``  -- every entry under *path*, depth-first, pre-order,
  children in lexical order

Two backends satisfy the :class:`Accessor` protocol independently:

- :class:`EmbeddedAccessor`        -- the read-only bundle shipped in the package
- :class:`LocalDirectoryAccessor`  -- the real filesystem under a root prefix

Both raise ``FileNotFoundError`` for absent paths and ``IsADirectoryError``
when a directory is opened.
"""

from __future__ import annotations

import errno
import io
import os
import stat as stat_module
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Protocol, runtime_checkable

from faas_cli.scaffold import paths
from faas_cli.scaffold.bundle import Bundle, default_bundle

EMBEDDED_DIR_MODE = 0o755
EMBEDDED_FILE_MODE = 0o644


@dataclass(frozen=True)
class EntryInfo:
    """Metadata for a single accessor entry."""

    name: str
    is_dir: bool
    mode: int  # permission bits only
    size: int = 0


@runtime_checkable
class Accessor(Protocol):
    """Capability set shared by every template source and decorator."""

    def stat(self, path: str) -> EntryInfo: ...

    def open(self, path: str) -> BinaryIO: ...

    def walk(self, path: str) -> Iterator[tuple[str, EntryInfo]]: ...


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def _is_directory(path: str) -> IsADirectoryError:
    return IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)


@contextmanager
def reported_as(translate: Callable[[str], str]) -> Iterator[None]:
    """Rewrite ``OSError.filename`` of escaping errors through *translate*.

    The error itself propagates unchanged apart from the reported path.
    """
    try:
        yield
    except OSError as exc:
        if isinstance(exc.filename, (str, os.PathLike)):
            exc.filename = translate(os.fspath(exc.filename))
        raise


# ---------------------------------------------------------------------------
# Embedded bundle backend
# ---------------------------------------------------------------------------


class EmbeddedAccessor:
    """Read-only accessor over the embedded template bundle.

    Modes are synthetic: directories report ``0o755`` and files ``0o644``.
    """

    def __init__(self, bundle: Bundle | None = None) -> None:
        self.bundle = bundle if bundle is not None else default_bundle()

    def stat(self, path: str) -> EntryInfo:
        path = paths.clean(path)
        entry = self.bundle.lookup(path)
        if entry is None:
            raise _not_found(path)
        if entry.is_dir:
            return EntryInfo(paths.basename(path), True, EMBEDDED_DIR_MODE)
        return EntryInfo(paths.basename(path), False, EMBEDDED_FILE_MODE, len(entry.data))

    def open(self, path: str) -> BinaryIO:
        path = paths.clean(path)
        entry = self.bundle.lookup(path)
        if entry is None:
            raise _not_found(path)
        if entry.is_dir:
            raise _is_directory(path)
        return io.BytesIO(entry.data)

    def walk(self, path: str) -> Iterator[tuple[str, EntryInfo]]:
        path = paths.clean(path)
        info = self.stat(path)
        yield path, info
        if info.is_dir:
            yield from self._walk_children(path)

    def _walk_children(self, directory: str) -> Iterator[tuple[str, EntryInfo]]:
        for name in self.bundle.children(directory):
            child = paths.join(directory, name)
            info = self.stat(child)
            yield child, info
            if info.is_dir:
                yield from self._walk_children(child)

    def __repr__(self) -> str:
        return f"EmbeddedAccessor(entries={len(self.bundle)})"


# ---------------------------------------------------------------------------
# Local directory backend
# ---------------------------------------------------------------------------


class LocalDirectoryAccessor:
    """Pass-through accessor over the real filesystem.

    Logical ``/a/b`` maps to ``<root>/a/b``.  With the default root of
    ``/`` logical paths are plain absolute paths.  Symbolic links are
    followed.  Failures other than absence (e.g. ``PermissionError``)
    propagate unchanged, except that ``filename`` reports the logical path.
    """

    def __init__(self, root: str | os.PathLike[str] = "/") -> None:
        self.root = Path(root)

    def physical_path(self, path: str) -> Path:
        return self.root.joinpath(*paths.parts(path))

    def logical_path(self, physical: str | os.PathLike[str]) -> str:
        """Map a host path under the root back to its logical path."""
        try:
            rel = Path(physical).relative_to(self.root)
        except ValueError:
            return os.fspath(physical)
        return paths.join(paths.ROOT, rel.as_posix())

    def stat(self, path: str) -> EntryInfo:
        path = paths.clean(path)
        with reported_as(self.logical_path):
            return self._info(paths.basename(path), os.stat(self.physical_path(path)))

    def open(self, path: str) -> BinaryIO:
        path = paths.clean(path)
        physical = self.physical_path(path)
        if physical.is_dir():
            raise _is_directory(path)
        with reported_as(self.logical_path):
            return open(physical, "rb")

    def walk(self, path: str) -> Iterator[tuple[str, EntryInfo]]:
        path = paths.clean(path)
        info = self.stat(path)
        yield path, info
        if info.is_dir:
            with reported_as(self.logical_path):
                yield from self._walk_children(path)

    def _walk_children(self, directory: str) -> Iterator[tuple[str, EntryInfo]]:
        with os.scandir(self.physical_path(directory)) as it:
            entries = sorted(it, key=lambda entry: entry.name)
        for entry in entries:
            child = paths.join(directory, entry.name)
            info = self._info(entry.name, entry.stat())
            yield child, info
            if info.is_dir:
                yield from self._walk_children(child)

    @staticmethod
    def _info(name: str, st: os.stat_result) -> EntryInfo:
        return EntryInfo(
            name=name,
            is_dir=stat_module.S_ISDIR(st.st_mode),
            mode=stat_module.S_IMODE(st.st_mode),
            size=st.st_size,
        )

    def __repr__(self) -> str:
        return f"LocalDirectoryAccessor(root={str(self.root)!r})"
