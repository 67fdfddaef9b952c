"""CLI helpers exposed for other modules."""

from .commands import register_commands

__all__ = ["register_commands"]
