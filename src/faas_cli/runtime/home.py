"""User configuration directory and local template cache discovery.

Provides the canonical functions for locating:
- The user-global faas configuration directory (cross-platform)
- The local template repositories cached beneath it
"""

from __future__ import annotations

import os
from pathlib import Path

TEMPLATES_ENV_VAR = "FAAS_TEMPLATES"
CONFIG_HOME_ENV_VAR = "FAAS_CONFIG_HOME"


def _is_windows() -> bool:
    """Return True when running on Windows."""
    return os.name == "nt"


def get_config_home() -> Path:
    """Return the path to the user-global faas configuration directory.

    Resolution order:
    1. FAAS_CONFIG_HOME environment variable (all platforms)
    2. $XDG_CONFIG_HOME/faas when XDG_CONFIG_HOME is set
    3. ~/.config/faas on macOS/Linux
    4. %LOCALAPPDATA%\\faas\\ on Windows (via platformdirs)

    Returns:
        Path: Absolute path to the configuration directory.
    """
    if env_home := os.environ.get(CONFIG_HOME_ENV_VAR):
        return Path(env_home)

    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home) / "faas"

    if _is_windows():
        from platformdirs import user_config_dir

        return Path(user_config_dir("faas", appauthor=False))

    return Path.home() / ".config" / "faas"


def get_templates_root() -> Path | None:
    """Return the directory holding local template repositories, if any.

    Resolution order:
    1. FAAS_TEMPLATES environment variable; an empty value disables local
       templates entirely
    2. ``<config home>/templates`` when that directory exists

    Returns:
        Path to the templates root, or None when no local templates are
        available.
    """
    if TEMPLATES_ENV_VAR in os.environ:
        env_root = os.environ[TEMPLATES_ENV_VAR].strip()
        return Path(env_root).expanduser() if env_root else None

    default_root = get_config_home() / "templates"
    if default_root.is_dir():
        return default_root
    return None
