"""CLI command modules for faas."""

from __future__ import annotations

import typer

from .create import create
from .templates_cmd import templates


def register_commands(app: typer.Typer) -> None:
    """Attach every top-level command to *app*."""
    app.command()(create)
    app.command()(templates)


__all__ = ["create", "register_commands", "templates"]
