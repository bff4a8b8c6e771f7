"""HTTP transports.

Both transports take a validated Request, send it below the configured base
URL and return the decoded JSON body (``None`` for empty responses), or the
result of ``request.parse`` when the request carries one.
"""

import logging
from typing import Any

import httpx

from .config import ClientConfig
from .exceptions import NetworkError, ServerError
from .types import Request

logger = logging.getLogger(__name__)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _handle(request: Request, response: httpx.Response) -> Any:
    logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
    body = _decode(response)
    if not response.is_success:
        logger.warning("%s %s failed with status %s", request.method, request.path, response.status_code)
        raise ServerError(response.status_code, body)
    if request.parse is not None:
        return request.parse(body)
    return body


def _network_error(request: Request, error: httpx.HTTPError) -> NetworkError:
    logger.warning("%s %s failed: %s", request.method, request.path, error)
    return NetworkError(f"{request.method} {request.path} failed: {error}")


class HttpTransport:
    """Synchronous transport backed by ``httpx.Client``.

    Args:
        config: Connection settings.
        client: Optional pre-built httpx client, e.g. one using
            ``httpx.MockTransport`` in tests.
    """

    def __init__(self, config: ClientConfig, client: httpx.Client | None = None):
        self.config = config
        self._client = client or httpx.Client(timeout=config.timeout, headers=config.headers)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, request: Request) -> Any:
        try:
            response = self._client.request(
                request.method,
                self.config.base_url + request.path,
                json=request.body,
            )
        except httpx.HTTPError as e:
            raise _network_error(request, e) from e
        return _handle(request, response)


class AsyncHttpTransport:
    """Async transport backed by ``httpx.AsyncClient``.

    Same interface as HttpTransport but ``send`` is a coroutine.
    """

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self._client = client or httpx.AsyncClient(timeout=config.timeout, headers=config.headers)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def send(self, request: Request) -> Any:
        try:
            response = await self._client.request(
                request.method,
                self.config.base_url + request.path,
                json=request.body,
            )
        except httpx.HTTPError as e:
            raise _network_error(request, e) from e
        return _handle(request, response)
