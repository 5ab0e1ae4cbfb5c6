"""Session authentication state and header derivation."""

from charlink.session.context import SessionContext
from charlink.session.models import AuthMode, SessionState

__all__ = ["AuthMode", "SessionContext", "SessionState"]
