"""Configuration loading for CharLink.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from charlink.config import get_settings

    settings = get_settings()
    base_url = settings.client.base_url
"""

from functools import lru_cache

from charlink.config.loader import load_config
from charlink.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Call `get_settings.cache_clear()` or `reload_settings()` to reload.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
