"""Entry points used by the function-creation command."""

from __future__ import annotations

import logging
import os

from faas_cli.runtime.home import get_templates_root
from faas_cli.scaffold import paths
from faas_cli.scaffold.bundle import Bundle
from faas_cli.scaffold.materialize import MaterializeReport, materialize
from faas_cli.scaffold.resolver import TemplateRef, is_builtin as _is_builtin, list_templates, resolve

logger = logging.getLogger(__name__)


class TemplateWriter:
    """Writes a runtime's template into a function project directory.

    Args:
        templates_root: Directory of locally cached template repositories,
            laid out as ``{repo}/{runtime}/{template}``.  ``None`` or empty
            means only embedded templates are available.
        bundle: Embedded bundle override (defaults to the built-in one).
    """

    def __init__(
        self,
        templates_root: str | os.PathLike[str] | None = None,
        bundle: Bundle | None = None,
    ) -> None:
        self.templates_root = templates_root or None
        self.bundle = bundle

    def write(self, runtime: str, template: str | None, dest: str | os.PathLike[str]) -> MaterializeReport:
        """Copy the (runtime, template) tree into *dest*.

        Raises:
            InvalidTemplateName, TemplateNotFound, SourceAccessError,
            DestinationWriteError
        """
        ref = TemplateRef.parse(runtime, template)
        resolution = resolve(ref, self.templates_root, self.bundle)
        logger.info(
            "Writing %s template %s into %s",
            resolution.source.value,
            ref,
            os.fspath(dest),
        )
        return materialize(resolution.accessor, paths.ROOT, dest)

    def is_builtin(self, runtime: str, template: str | None = None) -> bool:
        return _is_builtin(runtime, template, self.bundle)

    def templates(self, runtime: str | None = None) -> list[TemplateRef]:
        return list_templates(self.templates_root, runtime, self.bundle)


def write(runtime: str, template: str | None, dest: str | os.PathLike[str]) -> MaterializeReport:
    """Write a template using the configured templates root."""
    return TemplateWriter(get_templates_root()).write(runtime, template, dest)
