"""Session context: authentication state machine and request headers.

The context owns one SessionState for the lifetime of a client. State only
changes through `authenticate_with_token`, `authenticate_as_guest` and
`deauthenticate`, plus the explicit force-set operations used to restore a
session persisted elsewhere. Each authentication call is a single round
trip with no retry; on failure the previous state is kept.

Concurrent authentication calls on one context are not serialized here.
"""

from typing import Any
from uuid import uuid4

import httpx

from charlink.exceptions import (
    AlreadyAuthenticatedError,
    AuthError,
    InvalidTokenError,
    PreconditionError,
    TransportError,
    ValidationError,
)
from charlink.observability.logging import get_logger
from charlink.session.models import AuthMode, SessionState
from charlink.transport import JSON_CONTENT_TYPE, send

logger = get_logger(__name__)

TOKEN_EXCHANGE_PATH = "/dj-rest-auth/auth0/"
GUEST_REGISTRATION_PATH = "/chat/auth/lazy/"


class SessionContext:
    """Authentication state and header factory for one client."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        """Snapshot of the current state."""
        return self._state

    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def is_guest(self) -> bool:
        return self._state.is_guest

    def headers(self) -> dict[str, str]:
        """Build request headers from the current state.

        Recomputed on every call so a replaced token is picked up at once.
        """
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if self._state.is_authenticated:
            headers["authorization"] = f"Token {self._state.token}"
        return headers

    def require_authenticated(self, action: str = "this operation") -> None:
        """Fail fast before an authorized call is attempted.

        Raises:
            PreconditionError: If the session is not authenticated
        """
        if not self._state.is_authenticated:
            raise PreconditionError(f"You must be authenticated to perform {action}.")

    async def authenticate_with_token(self, external_token: str) -> str:
        """Exchange an external access token for a service session token.

        Args:
            external_token: Access token issued by the identity provider

        Returns:
            The service session token now held by this context

        Raises:
            AlreadyAuthenticatedError: If the session is already authenticated
            InvalidTokenError: If the token is not a non-empty string
            AuthError: If the exchange fails
        """
        self._ensure_unauthenticated()
        if not isinstance(external_token, str) or not external_token:
            raise InvalidTokenError("Specify a valid token.")

        data = await self._post_auth(
            TOKEN_EXCHANGE_PATH,
            {"access_token": external_token},
            failure="Token is invalid.",
        )

        session_token = data.get("key") if isinstance(data, dict) else None
        if not isinstance(session_token, str) or not session_token:
            raise AuthError("Token exchange response did not include a session key.", details=data)

        self._state = SessionState(auth_mode=AuthMode.REGISTERED, token=session_token)
        logger.debug("session_authenticated", auth_mode=AuthMode.REGISTERED.value)
        return session_token

    async def authenticate_as_guest(self) -> str:
        """Register an anonymous guest account and adopt its token.

        A fresh nonce is generated for the registration request and
        discarded afterwards. HTTP 200 alone is not success: the response
        must also carry `success: true`.

        Raises:
            AlreadyAuthenticatedError: If the session is already authenticated
            AuthError: If registration fails
        """
        self._ensure_unauthenticated()

        data = await self._post_auth(
            GUEST_REGISTRATION_PATH,
            {"lazy_uuid": str(uuid4())},
            failure="Failed to fetch a guest token.",
        )

        if not isinstance(data, dict) or data.get("success") is not True:
            raise AuthError("Guest registration failed.", status_code=200, details=data)

        token = data.get("token")
        if not isinstance(token, str) or not token:
            raise AuthError("Guest registration response did not include a token.", details=data)

        self._state = SessionState(auth_mode=AuthMode.GUEST, token=token)
        logger.debug("session_authenticated", auth_mode=AuthMode.GUEST.value)
        return token

    def deauthenticate(self) -> None:
        """Return to the unauthenticated state. No-op when already there."""
        if self._state.is_authenticated:
            self._state = SessionState()
            logger.debug("session_deauthenticated")

    # Force-set operations. These bypass transition checks and are meant for
    # restoring a session persisted outside the client. The one check kept is
    # that an authenticated mode always carries a token.

    @property
    def token(self) -> str | None:
        return self._state.token

    @token.setter
    def token(self, value: str | None) -> None:
        _check_token(self._state.auth_mode, value)
        self._state = self._state.model_copy(update={"token": value})

    def force_state(self, auth_mode: AuthMode, token: str | None) -> None:
        """Overwrite the state without any transition checks.

        Raises:
            ValidationError: If an authenticated mode is given no token
        """
        auth_mode = AuthMode(auth_mode)
        _check_token(auth_mode, token)
        self._state = SessionState(auth_mode=auth_mode, token=token)
        logger.debug("session_state_forced", auth_mode=self._state.auth_mode.value)

    def _ensure_unauthenticated(self) -> None:
        if self._state.is_authenticated:
            raise AlreadyAuthenticatedError("Already authenticated.")

    async def _post_auth(self, path: str, body: dict[str, Any], failure: str) -> Any:
        try:
            response = await send(self._http, "POST", path, headers=self.headers(), json=body)
        except TransportError as e:
            raise AuthError(failure, details=e.message) from e

        if response.status_code != 200:
            raise AuthError(failure, status_code=response.status_code, details=response.text)

        try:
            return response.json()
        except ValueError as e:
            raise AuthError(failure, status_code=response.status_code, details=response.text) from e


def _check_token(auth_mode: AuthMode, token: str | None) -> None:
    if auth_mode != AuthMode.UNAUTHENTICATED and (not isinstance(token, str) or not token):
        raise ValidationError("An authenticated session needs a non-empty token.")
