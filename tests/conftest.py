"""Shared test fixtures for the CharLink test suite."""

import json
from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from charlink.session import AuthMode, SessionContext

BASE_URL = "https://chat.example.test"


class FakeService:
    """In-process stand-in for the chat service, served through httpx.MockTransport.

    Usage:
        def test_something(service):
            service.add("POST", "/chat/auth/lazy/", json={"success": True, "token": "t"})
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json: Any = None,
        text: str | None = None,
    ) -> None:
        def _respond(_request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json)

        self.routes[(method, path)] = _respond

    def fail(self, method: str, path: str) -> None:
        """Make a route raise a connection error instead of answering."""

        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, path)] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(500, text=f"no route for {request.method} {request.url.path}")
        return route(request)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest_asyncio.fixture
async def http_client(service: FakeService) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(service.handler),
    ) as client:
        yield client


@pytest.fixture
def session(http_client: httpx.AsyncClient) -> SessionContext:
    return SessionContext(http_client)


@pytest.fixture
def registered_session(session: SessionContext) -> SessionContext:
    """Session restored as a registered user holding 'session-key'."""
    session.force_state(AuthMode.REGISTERED, "session-key")
    return session


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and TOML source before and after each test."""
    from charlink.config import get_settings
    from charlink.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})
