from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import Settings
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def build_tmdb_client(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.tmdb_base_url,
        timeout=settings.tmdb_timeout_seconds,
        headers={"Accept": "application/json"},
        transport=transport,
    )


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or response.reason_phrase


async def _get_json(
    client: httpx.AsyncClient,
    path: str,
    *,
    params: dict[str, Any],
    error_message: str,
) -> Any:
    try:
        r = await client.get(path, params=params)
        r.raise_for_status()
        return r.json()
    except httpx.HTTPStatusError as exc:
        details = _error_payload(exc.response)
        # Never log the request URL: it carries the api_key.
        logger.warning(
            "TMDb %s returned %s: %s",
            path,
            exc.response.status_code,
            details,
        )
        raise UpstreamError(
            error_message,
            status_code=exc.response.status_code,
            details=details,
        ) from exc
    except httpx.TimeoutException as exc:
        logger.warning("TMDb %s timed out: %s", path, exc)
        raise UpstreamError(
            error_message,
            status_code=504,
            details=str(exc) or "Upstream request timed out",
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("TMDb %s request failed: %s", path, exc)
        raise UpstreamError(
            error_message,
            status_code=500,
            details=str(exc) or type(exc).__name__,
        ) from exc
    except ValueError as exc:
        logger.warning("TMDb %s returned a non-JSON body", path)
        raise UpstreamError(
            error_message,
            status_code=500,
            details="Upstream returned an invalid JSON body",
        ) from exc


async def tmdb_search_multi(
    client: httpx.AsyncClient,
    *,
    api_key: str,
    query: str,
    page: int = 1,
) -> Any:
    return await _get_json(
        client,
        "/search/multi",
        params={"api_key": api_key, "query": query, "page": page},
        error_message="Error fetching data from TMDb",
    )


async def fetch_tmdb_details(
    client: httpx.AsyncClient,
    *,
    api_key: str,
    media_type: str,
    tmdb_id: int,
) -> Any:
    return await _get_json(
        client,
        f"/{media_type}/{tmdb_id}",
        params={"api_key": api_key},
        error_message=f"Error fetching {media_type} details from TMDb",
    )
