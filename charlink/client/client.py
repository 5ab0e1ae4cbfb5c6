"""CharLink API client.

Provides an async Python client for the character chat service.

Usage:
    from charlink.client import CharLinkClient

    async with CharLinkClient() as client:
        await client.authenticate_as_guest()
        chat = await client.create_or_continue_chat("character-external-id")
        print(chat.payload)
"""

from typing import Any
from urllib.parse import quote

import httpx

from charlink.chat.models import ConversationHandle
from charlink.chat.resolver import ChatResolver
from charlink.config.models.client import DEFAULT_BASE_URL
from charlink.config.settings import Settings
from charlink.exceptions import PreconditionError, ValidationError
from charlink.session.context import SessionContext
from charlink.transport import JSON_CONTENT_TYPE, expect_field, expect_ok, send


class CharLinkClient:
    """Async client for the character chat service.

    Attributes:
        base_url: Base URL of the service
        session: Authentication state and header factory
        chats: Conversation resolver bound to `session`
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        *,
        user_agent: str | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the service
            timeout: Request timeout in seconds
            user_agent: Optional User-Agent header for every request
            http: Pre-built httpx client; the caller keeps ownership of it
        """
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        if http is None:
            default_headers = {"User-Agent": user_agent} if user_agent else None
            http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(timeout),
                headers=default_headers,
            )
        self._client = http
        self.session = SessionContext(http)
        self.chats = ChatResolver(self.session, http)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "CharLinkClient":
        """Create a client from the `client` configuration section."""
        if settings is None:
            from charlink.config import get_settings

            settings = get_settings()

        config = settings.client
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
        )

    async def __aenter__(self) -> "CharLinkClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._client.aclose()

    # Authentication
    async def authenticate_with_token(self, token: str) -> str:
        """Exchange an external access token for a session token."""
        return await self.session.authenticate_with_token(token)

    async def authenticate_as_guest(self) -> str:
        """Register a guest account and adopt its token."""
        return await self.session.authenticate_as_guest()

    def deauthenticate(self) -> None:
        self.session.deauthenticate()

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated()

    def is_guest(self) -> bool:
        return self.session.is_guest()

    def headers(self) -> dict[str, str]:
        return self.session.headers()

    # Chat
    async def create_or_continue_chat(
        self,
        character_id: str,
        external_id: str | None = None,
    ) -> ConversationHandle:
        """Resume the conversation with a character, or start a new one."""
        return await self.chats.create_or_continue(character_id, external_id)

    # Characters
    async def fetch_categories(self) -> Any:
        """List character categories."""
        response = await send(
            self._client,
            "GET",
            "/chat/character/categories/",
            headers=self.session.headers(),
        )
        return expect_ok(response, "Failed to fetch categories.")

    async def fetch_characters_by_category(self, curated: bool = False) -> Any:
        """List characters grouped by regular or curated category."""
        if not isinstance(curated, bool):
            raise ValidationError("curated must be a boolean.")

        prefix = "curated_categories" if curated else "categories"
        response = await send(
            self._client,
            "GET",
            f"/chat/{prefix}/characters/",
            headers=self.session.headers(),
        )
        message = "Failed fetching characters by category."
        data = expect_ok(response, message)
        key = "characters_by_curated_category" if curated else "characters_by_category"
        return expect_field(data, key, message)

    async def fetch_featured_characters(self) -> Any:
        """List featured characters."""
        self.session.require_authenticated("fetch_featured_characters")
        response = await send(
            self._client,
            "GET",
            "/chat/characters/featured_v2/",
            headers=self.session.headers(),
        )
        return expect_ok(response, "Failed fetching featured characters.")

    async def fetch_character_info(self, character_id: str) -> Any:
        """Get the public profile of a character."""
        self.session.require_authenticated("fetch_character_info")
        if not isinstance(character_id, str) or character_id in ("", ".", ".."):
            raise ValidationError("character_id must be a non-empty string naming one path segment.")

        # The id is a single path segment; slashes must not reach the router
        segment = quote(character_id, safe="")
        response = await send(
            self._client,
            "GET",
            f"/chat/character/info-cached/{segment}/",
            headers=self.session.headers(),
        )
        message = "Could not fetch character information."
        data = expect_ok(response, message)
        return expect_field(data, "character", message)

    async def search_characters(self, character_name: str) -> Any:
        """Search characters by name. Not available to guest accounts."""
        self.session.require_authenticated("search_characters")
        if self.session.is_guest():
            raise PreconditionError("Guest accounts cannot use the search feature.")
        if not isinstance(character_name, str):
            raise ValidationError("character_name must be a string.")

        response = await send(
            self._client,
            "GET",
            "/chat/characters/search/",
            headers=self.session.headers(),
            params={"query": character_name},
        )
        return expect_ok(response, "Could not search for characters.")

    # User
    async def fetch_user_config(self) -> Any:
        """Get the public client configuration."""
        response = await send(
            self._client,
            "GET",
            "/chat/config/",
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )
        return expect_ok(response, "Failed fetching user configuration.")

    async def fetch_user(self) -> Any:
        """Get the authenticated user."""
        self.session.require_authenticated("fetch_user")
        response = await send(
            self._client,
            "GET",
            "/chat/user/",
            headers=self.session.headers(),
        )
        return expect_ok(response, "Failed fetching user.")

    async def fetch_recent_conversations(self) -> Any:
        """List characters the user has recently chatted with."""
        self.session.require_authenticated("fetch_recent_conversations")
        response = await send(
            self._client,
            "GET",
            "/chat/characters/recent/",
            headers=self.session.headers(),
        )
        return expect_ok(response, "Could not get recent conversations.")
