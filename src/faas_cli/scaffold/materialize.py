"""Copy a resolved template tree into a destination directory.

The copy is a single linear walk: directories are created (idempotently,
with their source mode) before their children, files are streamed with
their source mode.  The first failure aborts the walk.  Entries already
copied stay in place so the destination shows exactly how far the copy
got, and the raised error names the entry that failed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator, NamedTuple

from faas_cli.scaffold import paths
from faas_cli.scaffold.accessors import Accessor
from faas_cli.scaffold.exceptions import DestinationWriteError, SourceAccessError

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


class CopyStep(NamedTuple):
    """One entry of a copy plan, relative to the template root."""

    rel_path: str  # "." for the root itself
    is_dir: bool
    mode: int
    source: str  # path to hand back to the accessor


@dataclass
class MaterializeReport:
    """Relative paths created by a materialization."""

    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.directories) + len(self.files)


def plan_copy(accessor: Accessor, root: str = paths.ROOT) -> Iterator[CopyStep]:
    """Lazily derive copy steps from a walk of *root*.

    Raises:
        SourceAccessError: If the walk itself fails.
    """
    root = paths.clean(root)
    walker = accessor.walk(root)
    while True:
        try:
            path, info = next(walker)
        except StopIteration:
            return
        except OSError as exc:
            failed = os.fspath(exc.filename) if isinstance(exc.filename, (str, os.PathLike)) else root
            raise SourceAccessError(failed, exc) from exc

        rel = paths.relative(path, root)
        if rel is None:
            raise SourceAccessError(path, ValueError(f"walk escaped root '{root}'"))
        rel_path = rel.lstrip("/") or "."
        yield CopyStep(rel_path=rel_path, is_dir=info.is_dir, mode=info.mode, source=path)


def _copy_stream(src: BinaryIO, dst: BinaryIO, source_path: str, rel_path: str) -> None:
    # Not shutil.copyfileobj: read and write failures map to different errors.
    while True:
        try:
            chunk = src.read(COPY_CHUNK_SIZE)
        except OSError as exc:
            raise SourceAccessError(source_path, exc) from exc
        if not chunk:
            return
        try:
            dst.write(chunk)
        except OSError as exc:
            raise DestinationWriteError(rel_path, exc) from exc


def _make_directory(target: Path, step: CopyStep) -> None:
    try:
        target.mkdir(mode=step.mode, parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationWriteError(step.rel_path, exc) from exc


def _copy_file(accessor: Accessor, target: Path, step: CopyStep) -> None:
    try:
        src = accessor.open(step.source)
    except OSError as exc:
        raise SourceAccessError(step.source, exc) from exc

    with src:
        try:
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, step.mode)
        except OSError as exc:
            raise DestinationWriteError(step.rel_path, exc) from exc
        with os.fdopen(fd, "wb") as dst:
            _copy_stream(src, dst, step.source, step.rel_path)


def materialize(
    accessor: Accessor,
    root: str,
    dest: str | os.PathLike[str],
) -> MaterializeReport:
    """Recursively copy *root* from *accessor* into *dest*.

    *dest* is created when missing and need not be empty; existing files
    with the same relative path are truncated and overwritten.

    Raises:
        SourceAccessError: Walking, opening, or reading a source entry failed.
        DestinationWriteError: Creating or writing under *dest* failed.
    """
    dest_path = Path(dest)
    report = MaterializeReport()

    for step in plan_copy(accessor, root):
        target = dest_path if step.rel_path == "." else dest_path.joinpath(*step.rel_path.split("/"))
        if step.is_dir:
            logger.debug("mkdir %s (%o)", step.rel_path, step.mode)
            _make_directory(target, step)
            if step.rel_path != ".":
                report.directories.append(step.rel_path)
        else:
            logger.debug("copy %s (%o)", step.rel_path, step.mode)
            _copy_file(accessor, target, step)
            report.files.append(step.rel_path)

    logger.info(
        "Materialized %d files and %d directories into %s",
        len(report.files),
        len(report.directories),
        dest_path,
    )
    return report
