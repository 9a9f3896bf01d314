"""
Request/response primitive shared by every remote call.

The exchange classifies each completion as success-with-bytes, an HTTP status
error or a transport error, and optionally decodes the body into a typed model.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from imagefeed.core.errors import (
    HTTPStatusCodeError,
    PayloadDecodeError,
    RequestTransportError,
    UnknownNetworkError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _describe(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class HTTPExchange:
    """Issue ``httpx`` requests and map their outcome onto the error taxonomy."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def execute(self, request: httpx.Request) -> bytes:
        """Send ``request`` and return the body when the status is 2xx."""
        try:
            response = await self._client.send(request)
        except httpx.TransportError as exc:
            logger.warning(
                "Transport failure for %s %s: %s", request.method, request.url.path, exc
            )
            raise RequestTransportError(exc) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "HTTP failure for %s %s: %s", request.method, request.url.path, exc
            )
            raise UnknownNetworkError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.warning(
                "%s %s returned HTTP %s",
                request.method,
                request.url.path,
                response.status_code,
            )
            raise HTTPStatusCodeError(response.status_code, body=response.text)

        return response.content

    async def execute_typed(self, request: httpx.Request, target: type[T]) -> T:
        """Send ``request`` and decode the body as ``target``."""
        payload = await self.execute(request)
        try:
            return _adapter(target).validate_json(payload)
        except ValidationError as exc:
            logger.warning(
                "Could not decode %s %s as %s: %s",
                request.method,
                request.url.path,
                _describe(target),
                exc.error_count(),
            )
            raise PayloadDecodeError(_describe(target), str(exc)) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HTTPExchange":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["HTTPExchange"]
