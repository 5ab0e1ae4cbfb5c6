"""HTTP client configuration model."""

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://beta.character.ai"


class ClientConfig(BaseModel):
    """Connection settings for the chat service."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Service root URL")
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout applied at the transport boundary",
    )
    user_agent: str | None = Field(
        default=None,
        description="Optional User-Agent header sent with every request",
    )
