"""Per-function configuration stored in ``.faas.yaml`` at the function root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

# Optional file checked for in the function root.
CONFIG_FILE_NAME = ".faas.yaml"


class ConfigError(RuntimeError):
    """Raised when a function config file cannot be read or written."""


@dataclass(slots=True)
class FunctionConfig:
    """Mutable settings persisted alongside a function's source."""

    name: str = ""
    runtime: str = ""
    tag: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "runtime": self.runtime, "tag": self.tag}

    def apply(self, data: dict[str, object]) -> "FunctionConfig":
        """Overlay keys present in *data*.

        A key that is present but empty zeroes the value; absent keys keep
        the current value.
        """
        for key in ("name", "runtime", "tag"):
            if key in data:
                value = data[key]
                setattr(self, key, "" if value is None else str(value).strip())
        return self


def _config_path(root: str | os.PathLike[str]) -> Path:
    return Path(root) / CONFIG_FILE_NAME


def load_config(
    root: str | os.PathLike[str],
    defaults: FunctionConfig | None = None,
) -> FunctionConfig:
    """Load ``.faas.yaml`` from *root*, layered over *defaults*.

    A missing file returns the defaults unchanged.
    """
    config = defaults if defaults is not None else FunctionConfig()
    config_path = _config_path(root)
    if not config_path.exists():
        return config

    yaml = YAML(typ="safe", pure=True)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")
    return config.apply(payload)


def save_config(root: str | os.PathLike[str], config: FunctionConfig) -> Path:
    """Persist *config* into ``.faas.yaml``, preserving unrelated keys."""
    config_path = _config_path(root)

    yaml = YAML()
    yaml.preserve_quotes = True

    payload: object = {}
    try:
        if config_path.exists():
            with config_path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        payload = {}
    payload.update(config.to_dict())

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as handle:
            yaml.dump(payload, handle)
    except OSError as exc:
        raise ConfigError(f"Failed to write {config_path}: {exc}") from exc
    return config_path
