"""User-level runtime settings for faas.

This subpackage locates the user configuration directory and the local
template repositories cached beneath it.
"""

from faas_cli.runtime.home import get_config_home, get_templates_root

__all__ = [
    "get_config_home",
    "get_templates_root",
]
