from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_tmdb_api_key, get_tmdb_client
from app.core.errors import InvalidRequestError
from app.schemas.tmdb import MEDIA_TYPES, DetailsRequest, ErrorBody, SearchQuery
from app.services.tmdb import fetch_tmdb_details, tmdb_search_multi

router = APIRouter(prefix="/api", tags=["tmdb"])

_ERROR_RESPONSES = {
    400: {"model": ErrorBody},
    404: {"model": ErrorBody},
    500: {"model": ErrorBody},
    503: {"model": ErrorBody},
    504: {"model": ErrorBody},
}


def _parse_positive_int(raw: str | None, *, default: int | None = None) -> int | None:
    if raw is None or raw == "":
        return default
    cleaned = raw.strip()
    if not cleaned.isdecimal():
        return None
    value = int(cleaned)
    return value if value > 0 else None


def parse_search_query(query: str | None, page: str | None) -> SearchQuery:
    if query is None or not query.strip():
        raise InvalidRequestError("Search query is required.")

    page_number = _parse_positive_int(page, default=1)
    if page_number is None:
        raise InvalidRequestError("Page must be a positive integer.")

    return SearchQuery(query=query, page=page_number)


def parse_details_request(media_type: str, raw_id: str) -> DetailsRequest:
    if media_type not in MEDIA_TYPES:
        raise InvalidRequestError('Invalid media type. Must be "movie" or "tv".')

    tmdb_id = _parse_positive_int(raw_id)
    if tmdb_id is None:
        raise InvalidRequestError("Invalid id. Must be a positive integer.")

    return DetailsRequest(media_type=media_type, id=tmdb_id)


@router.get("/search", operation_id="search_media", responses=_ERROR_RESPONSES)
async def tmdb_search_route(
    query: str | None = Query(None, description="Free-text search across movies, TV shows and people"),
    page: str | None = Query(None, description="1-based result page, defaults to 1"),
    api_key: str = Depends(get_tmdb_api_key),
    client: httpx.AsyncClient = Depends(get_tmdb_client),
):
    search = parse_search_query(query, page)
    payload = await tmdb_search_multi(client, api_key=api_key, query=search.query, page=search.page)
    return JSONResponse(content=payload)


@router.get("/details/{media_type}/{tmdb_id}", operation_id="get_media_details", responses=_ERROR_RESPONSES)
async def tmdb_details_route(
    media_type: str,
    tmdb_id: str,
    api_key: str = Depends(get_tmdb_api_key),
    client: httpx.AsyncClient = Depends(get_tmdb_client),
):
    request = parse_details_request(media_type, tmdb_id)
    payload = await fetch_tmdb_details(
        client,
        api_key=api_key,
        media_type=request.media_type,
        tmdb_id=request.id,
    )
    return JSONResponse(content=payload)
