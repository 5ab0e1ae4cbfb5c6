"""Observability: structured logging with secret redaction.

Uses structlog for logging. The library only emits DEBUG events; call
`setup_logging` once at application startup, or `setup_logging_from_settings`
to read the configured values, to choose the level and renderer.
"""

from charlink.observability.logging import SecretRedactor, get_logger, setup_logging


def setup_logging_from_settings() -> None:
    """Configure logging from the `observability.logging` settings section."""
    from charlink.config import get_settings

    config = get_settings().observability.logging
    setup_logging(
        level=config.level,
        format=config.format,
        redact_secrets=config.redact_secrets,
    )


__all__ = ["SecretRedactor", "get_logger", "setup_logging", "setup_logging_from_settings"]
