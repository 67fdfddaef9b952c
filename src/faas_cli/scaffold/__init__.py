"""Template materialization for faas function projects."""

from .accessors import Accessor, EmbeddedAccessor, EntryInfo, LocalDirectoryAccessor
from .bundle import Bundle, default_bundle
from .decorators import ChrootAccessor, RenamingAccessor
from .exceptions import (
    DestinationWriteError,
    InvalidTemplateName,
    SourceAccessError,
    TemplateError,
    TemplateNotFound,
)
from .materialize import CopyStep, MaterializeReport, materialize, plan_copy
from .resolver import (
    DEFAULT_TEMPLATE,
    Resolution,
    TemplateRef,
    TemplateSource,
    is_builtin,
    list_templates,
    resolve,
)
from .writer import TemplateWriter, write

__all__ = [
    "Accessor",
    "Bundle",
    "ChrootAccessor",
    "CopyStep",
    "DEFAULT_TEMPLATE",
    "DestinationWriteError",
    "EmbeddedAccessor",
    "EntryInfo",
    "InvalidTemplateName",
    "LocalDirectoryAccessor",
    "MaterializeReport",
    "RenamingAccessor",
    "Resolution",
    "SourceAccessError",
    "TemplateError",
    "TemplateNotFound",
    "TemplateRef",
    "TemplateSource",
    "TemplateWriter",
    "default_bundle",
    "is_builtin",
    "list_templates",
    "materialize",
    "plan_copy",
    "resolve",
    "write",
]
