"""
faas CLI - scaffold function projects from runtime templates.

Usage:
    faas create <path> [--runtime go] [--template http]
    faas templates [--runtime go]
"""

from __future__ import annotations

import logging
import sys

import typer
from rich.console import Console

from faas_cli.cli import register_commands

__version__ = "0.1.0"

console = Console()

app = typer.Typer(
    name="faas",
    help="Create function projects from built-in and local runtime templates",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"faas {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug logging to stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
