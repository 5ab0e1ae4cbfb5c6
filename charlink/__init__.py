"""Async client for a character chat service.

Handles registered and guest authentication, request headers, and
resolution of "continue or create" chat conversations.
"""

from charlink.chat import ChatResolver, ConversationHandle, ConversationReference
from charlink.client import CharLinkClient
from charlink.exceptions import (
    AlreadyAuthenticatedError,
    AuthError,
    CharLinkError,
    InvalidTokenError,
    PreconditionError,
    ResolutionError,
    TransportError,
    ValidationError,
)
from charlink.session import AuthMode, SessionContext, SessionState

__all__ = [
    "AlreadyAuthenticatedError",
    "AuthError",
    "AuthMode",
    "CharLinkClient",
    "CharLinkError",
    "ChatResolver",
    "ConversationHandle",
    "ConversationReference",
    "InvalidTokenError",
    "PreconditionError",
    "ResolutionError",
    "SessionContext",
    "SessionState",
    "TransportError",
    "ValidationError",
]
