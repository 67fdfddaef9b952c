"""Top-level ``faas templates`` command.

Lists every template available to ``faas create``, marking which ones are
built in and which come from local template repositories.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from faas_cli.runtime.home import get_templates_root
from faas_cli.scaffold import TemplateError, TemplateWriter

console = Console()


def templates(
    runtime: Optional[str] = typer.Option(None, "--runtime", "-l", help="Only list templates for this runtime"),
    templates_root: Optional[Path] = typer.Option(
        None,
        "--templates",
        help="Directory of local template repositories",
    ),
) -> None:
    """List available function templates."""
    root = templates_root if templates_root is not None else get_templates_root()
    writer = TemplateWriter(root)

    try:
        refs = writer.templates(runtime)
    except TemplateError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if not refs:
        console.print("[yellow]No templates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Function Templates")
    table.add_column("Runtime", style="cyan")
    table.add_column("Template", style="bold")
    table.add_column("Source", style="magenta")

    for ref in refs:
        source = "built-in" if writer.is_builtin(ref.runtime, ref.template) else f"local ({ref.repo})"
        table.add_row(ref.runtime, ref.template, source)

    console.print(table)
    if root is None:
        console.print("[dim]No local templates root configured (set FAAS_TEMPLATES).[/dim]")
