"""Layered TOML configuration: config/default.toml, then config/{CHARLINK_ENV}.toml.

Both layers are optional so an installed library runs on model defaults.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_LAYERS = ("default", "{env}")


def get_config_dir() -> Path:
    """Directory holding the TOML layers.

    CHARLINK_CONFIG_DIR overrides the default of ./config. An explicit
    directory that does not exist is an error; the default may be absent.
    """
    configured = os.environ.get("CHARLINK_CONFIG_DIR")
    if configured is None:
        return Path.cwd() / "config"

    path = Path(configured)
    if not path.is_dir():
        raise FileNotFoundError(f"Config directory not found: {configured}")
    return path


def get_environment() -> str:
    return os.environ.get("CHARLINK_ENV", "development")


def read_layer(file_path: Path) -> dict[str, Any]:
    """Read one TOML layer; a missing file is an empty layer.

    Raises:
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        return {}
    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge `override` into a copy of `base`, recursing into shared tables."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Merge the configuration layers, later layers winning."""
    config_dir = get_config_dir()
    env = get_environment()

    config: dict[str, Any] = {}
    for layer in dict.fromkeys(name.format(env=env) for name in CONFIG_LAYERS):
        config = deep_merge(config, read_layer(config_dir / f"{layer}.toml"))
    return config
