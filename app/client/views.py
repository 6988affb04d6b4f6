from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from app.client.proxy import ProxyClient, ProxyRequestError
from app.schemas.tmdb import MEDIA_TYPES, MediaResult, MovieDetails, TVDetails

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred."
EMPTY_QUERY_ERROR = "Please enter a search query."
SEARCH_FAILED_ERROR = "An error occurred during search."
INVALID_DETAILS_ERROR = "Invalid media type or ID."


def media_label(media_type: str) -> str:
    return "Movie" if media_type == "movie" else "TV show"


def not_found_message(media_type: str) -> str:
    return f"{media_label(media_type)} not found."


@dataclass
class SearchState:
    query: str = ""
    results: list[MediaResult] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    searched: bool = False

    @property
    def show_no_results(self) -> bool:
        return self.searched and not self.loading and self.error is None and not self.results


class SearchView:
    """Search form state: one submission in flight at a time."""

    def __init__(self, proxy: ProxyClient) -> None:
        self._proxy = proxy
        self.state = SearchState()

    async def submit(self, query: str, page: int = 1) -> SearchState:
        if self.state.loading:
            return self.state

        self.state = SearchState(query=query, loading=True)

        if not query.strip():
            self.state = SearchState(query=query, error=EMPTY_QUERY_ERROR)
            return self.state

        try:
            search_page = await self._proxy.search(query, page=page)
        except ProxyRequestError as exc:
            logger.info("Search for %r failed: status=%s", query, exc.status_code)
            if exc.status_code is None:
                message = UNEXPECTED_ERROR
            else:
                message = exc.message or SEARCH_FAILED_ERROR
            self.state = SearchState(query=query, error=message, searched=True)
            return self.state
        except Exception:
            logger.exception("Search for %r failed", query)
            self.state = SearchState(query=query, error=UNEXPECTED_ERROR, searched=True)
            return self.state

        results = [item for item in search_page.results if item.media_type in MEDIA_TYPES]
        self.state = SearchState(query=query, results=results, searched=True)
        return self.state


@dataclass
class DetailsState:
    status: Literal["loading", "error", "ready"] = "loading"
    media_type: str | None = None
    item_id: int | None = None
    details: MovieDetails | TVDetails | None = None
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.status == "loading"


def _parse_item_id(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
        return value if value > 0 else None
    return None


class DetailsView:
    """Detail page state.

    Every ``load`` takes a new generation; a response is applied only if no
    newer ``load`` started while it was in flight.
    """

    def __init__(self, proxy: ProxyClient) -> None:
        self._proxy = proxy
        self._generation = 0
        self.state = DetailsState()

    @property
    def generation(self) -> int:
        return self._generation

    async def load(self, media_type: str, item_id: int | str) -> DetailsState:
        self._generation += 1
        token = self._generation

        parsed_id = _parse_item_id(item_id)
        self.state = DetailsState(status="loading", media_type=media_type, item_id=parsed_id)

        if media_type not in MEDIA_TYPES or parsed_id is None:
            self.state = DetailsState(status="error", media_type=media_type, error=INVALID_DETAILS_ERROR)
            return self.state

        try:
            details = await self._proxy.details(media_type, parsed_id)
        except ProxyRequestError as exc:
            logger.info("Fetching %s %s failed: status=%s", media_type, parsed_id, exc.status_code)
            result = DetailsState(
                status="error",
                media_type=media_type,
                item_id=parsed_id,
                error=self._error_message(media_type, exc),
            )
        except Exception:
            logger.exception("Fetching %s %s failed", media_type, parsed_id)
            result = DetailsState(status="error", media_type=media_type, item_id=parsed_id, error=UNEXPECTED_ERROR)
        else:
            result = DetailsState(status="ready", media_type=media_type, item_id=parsed_id, details=details)

        if token != self._generation:
            logger.debug("Dropping stale %s %s response", media_type, parsed_id)
            return result

        self.state = result
        return self.state

    @staticmethod
    def _error_message(media_type: str, exc: ProxyRequestError) -> str:
        if exc.status_code is None:
            return UNEXPECTED_ERROR
        if exc.status_code == 404:
            return not_found_message(media_type)
        return exc.message or f"Error fetching {media_type} details."
