"""Path-rewriting accessor decorators.

Each decorator wraps exactly one accessor and forwards ``stat``, ``open``
and ``walk`` after a local path transform.  They satisfy the same
:class:`~faas_cli.scaffold.accessors.Accessor` protocol as the backends, so
they stack in any order without knowing what they wrap.
"""

from __future__ import annotations

from dataclasses import replace
from typing import BinaryIO, Iterator, Mapping

from faas_cli.scaffold import paths
from faas_cli.scaffold.accessors import Accessor, EntryInfo, reported_as


class ChrootAccessor:
    """Rebase every logical path under a fixed virtual root.

    ``stat("/a")`` forwards ``stat(root + "/a")``; paths reported by ``walk``
    have the root stripped again, so a path yielded by ``walk`` can be passed
    straight back to ``stat``/``open``.
    """

    def __init__(self, accessor: Accessor, root: str) -> None:
        self.accessor = accessor
        self.root = paths.clean(root)

    def rebase(self, path: str) -> str:
        return paths.join(self.root, path)

    def unrebase(self, path: str) -> str:
        rel = paths.relative(path, self.root)
        if rel is None:
            raise ValueError(f"Path '{path}' is outside chroot '{self.root}'")
        return rel

    def _reported(self, path: str) -> str:
        rel = paths.relative(path, self.root)
        return path if rel is None else rel

    def stat(self, path: str) -> EntryInfo:
        with reported_as(self._reported):
            return self.accessor.stat(self.rebase(path))

    def open(self, path: str) -> BinaryIO:
        with reported_as(self._reported):
            return self.accessor.open(self.rebase(path))

    def walk(self, path: str) -> Iterator[tuple[str, EntryInfo]]:
        with reported_as(self._reported):
            for physical, info in self.accessor.walk(self.rebase(path)):
                yield self.unrebase(physical), info

    def __repr__(self) -> str:
        return f"ChrootAccessor({self.accessor!r}, root={self.root!r})"


class RenamingAccessor:
    """Substitute specific logical paths with alternate physical paths.

    *renames* maps logical paths to physical paths.  The longest mapped
    prefix of a cleaned input path is substituted, so renaming a directory
    also renames everything beneath it.  ``walk`` reports logical paths under
    the walked path, consistent with ``stat``/``open``: renamed targets inside
    the subtree appear under their logical names, and entries whose logical
    path a rename now points elsewhere are skipped.
    """

    def __init__(self, accessor: Accessor, renames: Mapping[str, str]) -> None:
        self.accessor = accessor
        self.renames: dict[str, str] = {}
        self._inverse: dict[str, str] = {}
        for logical, physical in renames.items():
            logical, physical = paths.clean(logical), paths.clean(physical)
            if physical in self._inverse and self._inverse[physical] != logical:
                raise ValueError(
                    f"Paths '{self._inverse[physical]}' and '{logical}' "
                    f"both rename to '{physical}'"
                )
            self.renames[logical] = physical
            self._inverse[physical] = logical

    @staticmethod
    def _substitute(path: str, mapping: Mapping[str, str]) -> str:
        path = paths.clean(path)
        candidate = path
        while True:
            target = mapping.get(candidate)
            if target is not None:
                rest = paths.relative(path, candidate)
                return paths.join(target, rest)
            if candidate == paths.ROOT:
                return path
            candidate = paths.clean(candidate + "/..")

    def to_physical(self, path: str) -> str:
        return self._substitute(path, self.renames)

    def to_logical(self, path: str) -> str:
        return self._substitute(path, self._inverse)

    @staticmethod
    def _renamed(info: EntryInfo, logical: str, physical: str) -> EntryInfo:
        if logical == physical:
            return info
        return replace(info, name=paths.basename(logical))

    def stat(self, path: str) -> EntryInfo:
        logical = paths.clean(path)
        physical = self.to_physical(logical)
        return self._renamed(self.accessor.stat(physical), logical, physical)

    def open(self, path: str) -> BinaryIO:
        return self.accessor.open(self.to_physical(path))

    def _walked_logical(self, physical: str, logical_root: str, physical_root: str) -> str | None:
        rest = paths.relative(physical, physical_root)
        if rest is None:
            raise ValueError(f"Path '{physical}' is outside walked root '{physical_root}'")
        if rest == paths.ROOT:
            return logical_root
        candidate = self.to_logical(physical)
        if paths.relative(candidate, logical_root) is None or self.to_physical(candidate) != physical:
            candidate = paths.join(logical_root, rest)
        # Shadowed by a rename: the logical path now names another entry.
        if self.to_physical(candidate) != physical:
            return None
        return candidate

    def walk(self, path: str) -> Iterator[tuple[str, EntryInfo]]:
        logical_root = paths.clean(path)
        physical_root = self.to_physical(logical_root)
        for physical, info in self.accessor.walk(physical_root):
            logical = self._walked_logical(physical, logical_root, physical_root)
            if logical is not None:
                yield logical, self._renamed(info, logical, physical)

    def __repr__(self) -> str:
        return f"RenamingAccessor({self.accessor!r}, renames={self.renames!r})"
