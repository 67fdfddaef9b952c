"""CLI command for creating a new function project from a template.

Usage:
    faas create ./my-func                     # Go HTTP function
    faas create ./my-func -l node -t events   # Node CloudEvents function
    faas create ./my-func -t boson/json       # Template from a local repository
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from faas_cli.config import ConfigError, FunctionConfig, load_config, save_config
from faas_cli.runtime.home import get_templates_root
from faas_cli.scaffold import DEFAULT_TEMPLATE, TemplateError, TemplateWriter

console = Console()

DEFAULT_RUNTIME = "go"


def _is_empty_dir(path: Path) -> bool:
    return not any(path.iterdir())


def create(
    path: Path = typer.Argument(
        Path("."),
        help="Directory in which to create the function (created if missing)",
    ),
    runtime: str = typer.Option(DEFAULT_RUNTIME, "--runtime", "-l", help="Function runtime language"),
    template: str = typer.Option(
        DEFAULT_TEMPLATE,
        "--template",
        "-t",
        help="Template name, or REPO/NAME for a template from a local repository",
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Function name (defaults to the directory name)"),
    templates: Optional[Path] = typer.Option(
        None,
        "--templates",
        help="Directory of local template repositories",
    ),
) -> None:
    """Create a new function project from a runtime template.

    Built-in templates are always preferred over same-named local ones.
    The target directory must be empty.

    Examples:
        faas create ./hello                 # go/http
        faas create ./hello -l python -t events
    """
    root = path.expanduser().resolve()
    if root.exists() and (not root.is_dir() or not _is_empty_dir(root)):
        console.print(f"[red]Error:[/red] destination must be an empty directory: {root}")
        raise typer.Exit(1)

    templates_root = templates if templates is not None else get_templates_root()
    writer = TemplateWriter(templates_root)

    try:
        report = writer.write(runtime, template, root)
        # A template may ship its own .faas.yaml; command-line values win.
        config = load_config(root, FunctionConfig())
        config.name = name or root.name
        config.runtime = runtime
        config_path = save_config(root, config)
    except (TemplateError, ConfigError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    origin = "built-in" if writer.is_builtin(runtime, template) else "local"
    console.print(
        f"[green]Created[/green] {runtime} function [bold]{config.name}[/bold] "
        f"from {origin} template '{template}' in {root}"
    )
    console.print(f"  {len(report.files)} files, {len(report.directories)} directories")
    console.print(f"  [dim]config: {config_path}[/dim]")
