"""Session state models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AuthMode(str, Enum):
    """Authentication mode of a session.

    - UNAUTHENTICATED: No token; only public endpoints are usable
    - GUEST: Anonymous (lazy) account registered with a one-time nonce
    - REGISTERED: Token exchanged from an external access token
    """

    UNAUTHENTICATED = "unauthenticated"
    GUEST = "guest"
    REGISTERED = "registered"


class SessionState(BaseModel):
    """Authentication state of one client.

    Transitions replace the whole record, so a failed operation never
    leaves a half-updated state behind. The token is set exactly when the
    mode is not UNAUTHENTICATED, unless a caller force-sets it.
    """

    model_config = ConfigDict(frozen=True)

    auth_mode: AuthMode = Field(
        default=AuthMode.UNAUTHENTICATED, description="Current authentication mode"
    )
    token: str | None = Field(default=None, description="Service session token")

    @property
    def is_authenticated(self) -> bool:
        return self.auth_mode != AuthMode.UNAUTHENTICATED

    @property
    def is_guest(self) -> bool:
        return self.auth_mode == AuthMode.GUEST
