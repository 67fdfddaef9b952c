"""Exception hierarchy for template materialization."""

from __future__ import annotations


class TemplateError(Exception):
    """Base exception for template resolution and copy errors."""
    pass


class InvalidTemplateName(TemplateError):
    """Template name is not a bare name or a ``REPO/NAME`` composite."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Invalid template name '{name}': "
            f"template name must be in the format 'REPO/NAME'"
        )


class TemplateNotFound(TemplateError):
    """Neither the embedded bundle nor a local repository has the template."""

    def __init__(self, runtime: str, template: str, message: str | None = None):
        self.runtime = runtime
        self.template = template
        if message:
            super().__init__(message)
        else:
            super().__init__(
                f"A template for runtime '{runtime}' template '{template}' "
                f"was not found internally and no custom template path was defined."
            )


class SourceAccessError(TemplateError):
    """Reading the resolved template source failed.

    Raised for failures other than plain absence during resolution (e.g. a
    permission error on the local cache), and for any failure to stat, open,
    or read an entry while it is being copied.
    """

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot read template entry '{path}'{detail}")


class DestinationWriteError(TemplateError):
    """Creating a directory or writing a file under the destination failed."""

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot write '{path}' in destination{detail}")
