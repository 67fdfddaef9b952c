"""Embedded template bundle.

The templates that ship with faas are packaged as data inside the
``faas_cli`` distribution (``faas_cli/assets/templates``).  On first use
that snapshot is read once into an immutable, process-wide :class:`Bundle`
mounted at ``/templates``.  The bundle is never mutated afterwards, so it
can be shared by any number of concurrent readers and needs no teardown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib.resources import files
from importlib.resources.abc import Traversable
from types import MappingProxyType
from typing import Iterator, Mapping

from faas_cli.scaffold import paths

logger = logging.getLogger(__name__)

ASSET_PACKAGE = "faas_cli"
ASSET_DIR = ("assets", "templates")
MOUNT_POINT = "/templates"

_SKIPPED_DIRS = frozenset({"__pycache__"})
_SKIPPED_SUFFIXES = (".pyc", ".pyo")


@dataclass(frozen=True)
class BundleEntry:
    """A single bundled path: directory marker or file content."""

    data: bytes | None = None

    @property
    def is_dir(self) -> bool:
        return self.data is None


_DIRECTORY = BundleEntry()


class Bundle:
    """Immutable table of logical paths to bundled content.

    Parent directories are implied by file paths and added automatically.
    A precomputed child index keeps traversal ordered without sorting on
    every walk.
    """

    def __init__(self, entries: Mapping[str, bytes | None] | None = None) -> None:
        table: dict[str, BundleEntry] = {paths.ROOT: _DIRECTORY}
        children: dict[str, set[str]] = {paths.ROOT: set()}

        for raw_path, data in (entries or {}).items():
            path = paths.clean(raw_path)
            entry = _DIRECTORY if data is None else BundleEntry(bytes(data))

            # Register every ancestor as a directory
            segments = paths.parts(path)
            parent = paths.ROOT
            for segment in segments[:-1]:
                current = paths.join(parent, segment)
                existing = table.get(current)
                if existing is not None and not existing.is_dir:
                    raise ValueError(f"Bundle path '{current}' is both a file and a directory")
                table[current] = _DIRECTORY
                children.setdefault(current, set())
                children[parent].add(segment)
                parent = current

            if path == paths.ROOT:
                if not entry.is_dir:
                    raise ValueError("Bundle root must be a directory")
                continue
            existing = table.get(path)
            if existing is not None and existing.is_dir != entry.is_dir:
                raise ValueError(f"Bundle path '{path}' is both a file and a directory")
            table[path] = entry
            if entry.is_dir:
                children.setdefault(path, set())
            children[parent].add(segments[-1])

        self._entries = MappingProxyType(table)
        self._children = MappingProxyType(
            {path: tuple(sorted(names)) for path, names in children.items()}
        )

    @classmethod
    def from_mapping(cls, entries: Mapping[str, bytes | str | None]) -> "Bundle":
        """Build a bundle from ``{path: content}``; ``None`` marks an empty directory."""
        normalized: dict[str, bytes | None] = {}
        for path, data in entries.items():
            if isinstance(data, str):
                data = data.encode("utf-8")
            normalized[path] = data
        return cls(normalized)

    @classmethod
    def from_resources(cls, root: Traversable, mount: str = MOUNT_POINT) -> "Bundle":
        """Snapshot an ``importlib.resources`` tree, mounted at *mount*."""
        entries: dict[str, bytes | None] = {paths.clean(mount): None}
        stack: list[tuple[Traversable, str]] = [(root, paths.clean(mount))]
        while stack:
            node, prefix = stack.pop()
            for child in node.iterdir():
                logical = paths.join(prefix, child.name)
                if child.is_dir():
                    if child.name in _SKIPPED_DIRS:
                        continue
                    entries[logical] = None
                    stack.append((child, logical))
                elif child.is_file():
                    if child.name.endswith(_SKIPPED_SUFFIXES):
                        continue
                    entries[logical] = child.read_bytes()
        return cls(entries)

    def lookup(self, path: str) -> BundleEntry | None:
        return self._entries.get(paths.clean(path))

    def children(self, path: str) -> tuple[str, ...]:
        """Child names of directory *path* in lexical order."""
        return self._children.get(paths.clean(path), ())

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and paths.clean(path) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


@lru_cache(maxsize=1)
def default_bundle() -> Bundle:
    """Return the process-wide bundle of built-in templates."""
    root = files(ASSET_PACKAGE).joinpath(*ASSET_DIR)
    if not root.is_dir():
        logger.warning("Built-in template assets not found in package %s", ASSET_PACKAGE)
        return Bundle({MOUNT_POINT: None})
    bundle = Bundle.from_resources(root, mount=MOUNT_POINT)
    logger.debug("Loaded %d embedded template entries", len(bundle))
    return bundle
