"""Single request helper shared by the session, resolver and client.

Every network round trip goes through `send`, which applies the headers
computed by the caller and converts httpx transport failures (connection
errors, timeouts) into TransportError. Status codes are left for the
caller to interpret since each endpoint accepts a different set.
"""

from typing import Any

import httpx

from charlink.exceptions import TransportError
from charlink.observability.logging import get_logger

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


async def send(
    http: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    headers: dict[str, str],
    json: dict[str, Any] | None = None,
    params: dict[str, Any] | None = None,
) -> httpx.Response:
    """Issue one request and return the raw response.

    Raises:
        TransportError: If the request could not be completed
    """
    try:
        response = await http.request(
            method,
            path,
            headers=headers,
            json=json,
            params=params,
        )
    except httpx.HTTPError as e:
        raise TransportError(f"{method} {path} failed: {e}") from e

    logger.debug(
        "service_request",
        method=method,
        path=path,
        status_code=response.status_code,
    )
    return response


def expect_ok(response: httpx.Response, message: str) -> Any:
    """Return the decoded JSON body of a 200 response.

    Raises:
        TransportError: If the status is anything other than 200
    """
    if response.status_code != 200:
        raise TransportError(
            message,
            status_code=response.status_code,
            details=response.text,
        )
    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            message,
            status_code=response.status_code,
            details=response.text,
        ) from e


def expect_field(data: Any, key: str, message: str) -> Any:
    """Return `data[key]` from a decoded 200 body.

    Raises:
        TransportError: If the body is not an object carrying `key`
    """
    if not isinstance(data, dict) or key not in data:
        raise TransportError(message, status_code=200, details=data)
    return data[key]
