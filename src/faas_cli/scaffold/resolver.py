"""Template resolution: embedded bundle > local template repositories.

Sources (checked in order):
1. EMBEDDED  -- ``/templates/{runtime}/{template}`` in the built-in bundle
               (bare template names only)
2. LOCAL     -- ``{templates_root}/{repo}/{runtime}/{template}`` on disk
               (``repo/template`` composite names only)

Embedded templates always win, so a partially populated local cache can
never shadow a built-in template of the same name.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from faas_cli.scaffold import paths
from faas_cli.scaffold.accessors import Accessor, EmbeddedAccessor, LocalDirectoryAccessor
from faas_cli.scaffold.bundle import MOUNT_POINT, Bundle, default_bundle
from faas_cli.scaffold.decorators import ChrootAccessor
from faas_cli.scaffold.exceptions import InvalidTemplateName, SourceAccessError, TemplateNotFound

logger = logging.getLogger(__name__)

# Default function signature; every runtime ships at least "http" and "events".
DEFAULT_TEMPLATE = "http"
TEMPLATE_SEPARATOR = "/"


# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------

class TemplateSource(Enum):
    EMBEDDED = "embedded"
    LOCAL = "local"


@dataclass(frozen=True)
class TemplateRef:
    """A (runtime, template) request.

    ``template`` is either a bare name, looked up in the embedded bundle, or
    a ``repo/template`` composite, looked up in a local repository.
    """

    runtime: str
    template: str

    @classmethod
    def parse(cls, runtime: str, template: str | None = None) -> "TemplateRef":
        """Build a validated reference; an empty template means the default.

        Raises:
            InvalidTemplateName: If a composite name does not split into
                exactly two non-empty segments.
        """
        template = template or DEFAULT_TEMPLATE
        if "\\" in template or template in (".", ".."):
            raise InvalidTemplateName(template)
        if TEMPLATE_SEPARATOR in template:
            segments = template.split(TEMPLATE_SEPARATOR)
            if len(segments) != 2 or any(s in ("", ".", "..") for s in segments):
                raise InvalidTemplateName(template)
        return cls(runtime=runtime, template=template)

    @property
    def is_composite(self) -> bool:
        return TEMPLATE_SEPARATOR in self.template

    @property
    def repo(self) -> str | None:
        if not self.is_composite:
            return None
        return self.template.split(TEMPLATE_SEPARATOR)[0]

    @property
    def name(self) -> str:
        return self.template.split(TEMPLATE_SEPARATOR)[-1]

    @property
    def embedded_path(self) -> str:
        return paths.join(MOUNT_POINT, f"{self.runtime}/{self.name}")

    def __str__(self) -> str:
        return f"{self.runtime}/{self.template}"


@dataclass(frozen=True)
class Resolution:
    """The accessor that answers a template request.

    ``accessor`` is already rebased so that ``/`` is the template root.
    """

    ref: TemplateRef
    source: TemplateSource
    accessor: Accessor
    location: str


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _valid_runtime(runtime: str) -> bool:
    return bool(runtime) and not any(sep in runtime for sep in ("/", "\\")) and runtime not in (".", "..")


def _embedded_match(ref: TemplateRef, accessor: EmbeddedAccessor) -> bool:
    if ref.is_composite or not _valid_runtime(ref.runtime):
        return False
    try:
        return accessor.stat(ref.embedded_path).is_dir
    except FileNotFoundError:
        return False


def _local_location(ref: TemplateRef) -> str:
    """Logical location of a composite template under the templates root."""
    return paths.join(paths.ROOT, f"{ref.repo}/{ref.runtime}/{ref.name}")


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve(
    ref: TemplateRef,
    templates_root: str | os.PathLike[str] | None = None,
    bundle: Bundle | None = None,
) -> Resolution:
    """Select the accessor and root that answer *ref*.

    Args:
        ref: Parsed template reference.
        templates_root: Directory holding local template repositories.
            ``None`` or empty means no local templates are available.
        bundle: Embedded bundle override (defaults to the built-in one).

    Returns:
        Resolution whose accessor is chrooted to the template root.

    Raises:
        TemplateNotFound: If no source provides the template.
        InvalidTemplateName: If a bare name is not built in while a
            templates root is configured.
        SourceAccessError: If the local template cannot be inspected.
    """
    embedded = EmbeddedAccessor(bundle)
    if _embedded_match(ref, embedded):
        location = ref.embedded_path
        logger.debug("Resolved %s from embedded bundle at %s", ref, location)
        return Resolution(
            ref=ref,
            source=TemplateSource.EMBEDDED,
            accessor=ChrootAccessor(embedded, location),
            location=location,
        )

    if not templates_root or not _valid_runtime(ref.runtime):
        raise TemplateNotFound(ref.runtime, ref.template)
    if not ref.is_composite:
        # Not built in, so it can only name a local template.
        raise InvalidTemplateName(ref.template)

    local = LocalDirectoryAccessor(templates_root)
    logical = _local_location(ref)
    location = str(local.physical_path(logical))
    try:
        info = local.stat(logical)
    except (FileNotFoundError, NotADirectoryError):
        info = None
    except OSError as exc:
        raise SourceAccessError(location, exc) from exc

    if info is None or not info.is_dir:
        raise TemplateNotFound(
            ref.runtime,
            ref.template,
            f"Template '{ref.name}' for runtime '{ref.runtime}' was not found "
            f"in repository '{ref.repo}' ({location})",
        )

    logger.debug("Resolved %s from local repository at %s", ref, location)
    return Resolution(
        ref=ref,
        source=TemplateSource.LOCAL,
        accessor=ChrootAccessor(local, logical),
        location=location,
    )


def is_builtin(runtime: str, template: str | None = None, bundle: Bundle | None = None) -> bool:
    """Return True when (runtime, template) is served by the embedded bundle.

    Never performs a copy and never raises for malformed names.
    """
    try:
        ref = TemplateRef.parse(runtime, template)
    except InvalidTemplateName:
        return False
    return _embedded_match(ref, EmbeddedAccessor(bundle))


def list_templates(
    templates_root: str | os.PathLike[str] | None = None,
    runtime: str | None = None,
    bundle: Bundle | None = None,
) -> list[TemplateRef]:
    """Enumerate every available template, embedded first.

    Embedded templates are listed by bare name; local templates as
    ``repo/template`` composites.

    Raises:
        SourceAccessError: If the local templates root cannot be listed.
    """
    bundle = bundle if bundle is not None else default_bundle()
    refs: list[TemplateRef] = []

    for rt in bundle.children(MOUNT_POINT):
        if runtime is not None and rt != runtime:
            continue
        runtime_dir = paths.join(MOUNT_POINT, rt)
        for name in bundle.children(runtime_dir):
            entry = bundle.lookup(paths.join(runtime_dir, name))
            if entry is not None and entry.is_dir:
                refs.append(TemplateRef(rt, name))

    if not templates_root:
        return refs
    root = Path(templates_root)
    if not _is_dir(root):
        logger.debug("Templates root %s does not exist", root)
        return refs

    try:
        for repo in sorted(p for p in root.iterdir() if p.is_dir()):
            for rt_dir in sorted(p for p in repo.iterdir() if p.is_dir()):
                if runtime is not None and rt_dir.name != runtime:
                    continue
                for template_dir in sorted(p for p in rt_dir.iterdir() if p.is_dir()):
                    refs.append(
                        TemplateRef(rt_dir.name, f"{repo.name}{TEMPLATE_SEPARATOR}{template_dir.name}")
                    )
    except OSError as exc:
        raise SourceAccessError(str(root), exc) from exc

    return refs
