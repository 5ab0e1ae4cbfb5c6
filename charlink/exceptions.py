"""Exception hierarchy for the CharLink client.

All client errors inherit from CharLinkError, which carries the message,
the HTTP status code when one was received, and the decoded response
details when available. Nothing is retried or swallowed internally; every
error surfaces to the immediate caller of the failing operation.
"""

from typing import Any


class CharLinkError(Exception):
    """Base exception for all client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class PreconditionError(CharLinkError):
    """Raised when an operation is invoked in the wrong session state."""


class ValidationError(CharLinkError):
    """Raised when caller-supplied arguments are malformed."""


class TransportError(CharLinkError):
    """Raised when the service answers with an unexpected status or is unreachable."""


class ResolutionError(CharLinkError):
    """Raised when a chat conversation cannot be resumed or created."""


class AuthError(CharLinkError):
    """Raised when an authentication exchange fails."""


class AlreadyAuthenticatedError(PreconditionError, AuthError):
    """Raised when authenticating a session that is already authenticated."""


class InvalidTokenError(ValidationError, AuthError):
    """Raised when the external access token is not a non-empty string."""


__all__ = [
    "AlreadyAuthenticatedError",
    "AuthError",
    "CharLinkError",
    "InvalidTokenError",
    "PreconditionError",
    "ResolutionError",
    "TransportError",
    "ValidationError",
]
