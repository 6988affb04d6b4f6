from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import Settings
from app.schemas.tmdb import MovieDetails, SearchPage, TVDetails, parse_media_details, parse_search_page

logger = logging.getLogger(__name__)


class ProxyRequestError(RuntimeError):
    """A call to the proxy service failed.

    ``status_code`` is None when no HTTP response was received.
    ``message`` is the proxy's ``message`` field when the body carried one.
    """

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        super().__init__(message or f"Proxy request failed (status={status_code})")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class ProxyClient:
    """HTTP client for the proxy service's ``/api`` endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ProxyClient":
        return cls(settings.proxy_base_url, timeout=settings.tmdb_timeout_seconds, transport=transport)

    async def __aenter__(self) -> "ProxyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            r = await self._client.get(path, params=params)
        except httpx.RequestError as exc:
            logger.warning("Proxy %s request failed: %s", path, exc)
            raise ProxyRequestError(None) from exc

        if r.is_error:
            raise ProxyRequestError(r.status_code, _error_message(r))
        return r.json()

    async def search(self, query: str, page: int = 1) -> SearchPage:
        data = await self._get("/search", params={"query": query, "page": page})
        return parse_search_page(data if isinstance(data, dict) else {})

    async def details(self, media_type: str, item_id: int) -> MovieDetails | TVDetails:
        data = await self._get(f"/details/{media_type}/{item_id}")
        return parse_media_details(media_type, data if isinstance(data, dict) else {})
