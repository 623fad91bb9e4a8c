"""
HTTP client construction: base URL, timeout policy and bearer authentication.
"""
import logging
from typing import Callable, Generator, Optional

import httpx

from catalog_admin.core.config import Settings
from catalog_admin.core.exceptions import BackendError, TransportError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class BearerTokenAuth(httpx.Auth):
    """Attach the current session token, read on every request, to outgoing requests."""

    def __init__(self, token_provider: TokenProvider) -> None:
        self._token_provider = token_provider

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._token_provider()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


def create_http_client(
    config: Settings,
    token_provider: TokenProvider,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` pointed at the configured backend."""
    logger.info("Creating HTTP client for %s", config.API_BASE_URL)
    return httpx.AsyncClient(
        base_url=config.API_BASE_URL,
        auth=BearerTokenAuth(token_provider),
        timeout=config.REQUEST_TIMEOUT,
        transport=transport,
    )


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Extract a human readable message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None


async def send_request(
    client: httpx.AsyncClient, method: str, url: str, **kwargs
) -> httpx.Response:
    """
    Send a request and translate failures into console errors.

    Raises:
        TransportError: if no response was received.
        BackendError: if the response status is not 2xx.
    """
    logger.trace("Sending %s %s", method, url)
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.error("Transport failure on %s %s: %s", method, url, exc)
        raise TransportError(str(exc) or type(exc).__name__) from exc

    if response.is_error:
        detail = _error_detail(response)
        logger.warning(
            "Backend rejected %s %s status=%s detail=%s",
            method,
            url,
            response.status_code,
            detail,
        )
        raise BackendError(response.status_code, detail)
    return response


def read_json(response: httpx.Response):
    """Return the decoded JSON body, or None for an empty body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise BackendError(response.status_code, "Response body is not valid JSON") from exc
