"""Configuration model exports.

    from charlink.config.models import ClientConfig, LoggingConfig
"""

from charlink.config.models.client import DEFAULT_BASE_URL, ClientConfig
from charlink.config.models.observability import LoggingConfig, ObservabilityConfig

__all__ = [
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "LoggingConfig",
    "ObservabilityConfig",
]
