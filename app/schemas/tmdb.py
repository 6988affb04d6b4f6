from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

MEDIA_TYPES = ("movie", "tv")


class SearchQuery(BaseModel):
    query: str = Field(min_length=1)
    page: int = Field(default=1, ge=1)


class DetailsRequest(BaseModel):
    media_type: Literal["movie", "tv"]
    id: int = Field(gt=0)


class ErrorBody(BaseModel):
    message: str
    details: Any = None


class MediaResult(BaseModel):
    # Upstream fields we do not model pass through untouched.
    model_config = ConfigDict(extra="allow")

    id: int
    media_type: Literal["movie", "tv", "person"]
    title: str | None = None
    name: str | None = None
    poster_path: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    overview: str | None = None

    @property
    def display_title(self) -> str:
        return self.title or self.name or ""

    @property
    def display_date(self) -> str | None:
        if self.media_type == "movie":
            return self.release_date or None
        return self.first_air_date or None


class SearchPage(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: int = 1
    results: list[MediaResult] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class Genre(BaseModel):
    id: int
    name: str


class ProductionCompany(BaseModel):
    id: int
    name: str
    logo_path: str | None = None
    origin_country: str | None = None


class _MediaDetailsBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genres: list[Genre] = Field(default_factory=list)
    vote_average: float | None = None
    tagline: str | None = None
    status: str | None = None
    production_companies: list[ProductionCompany] = Field(default_factory=list)


class MovieDetails(_MediaDetailsBase):
    media_type: Literal["movie"] = "movie"
    title: str | None = None
    release_date: str | None = None
    runtime: int | None = None
    budget: int | None = None
    revenue: int | None = None

    @property
    def display_title(self) -> str:
        return self.title or ""

    @property
    def display_date(self) -> str | None:
        return self.release_date or None

    @property
    def runtime_minutes(self) -> int | None:
        if self.runtime and self.runtime > 0:
            return self.runtime
        return None


class TVDetails(_MediaDetailsBase):
    media_type: Literal["tv"] = "tv"
    name: str | None = None
    first_air_date: str | None = None
    episode_run_time: list[int] = Field(default_factory=list)
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None

    @property
    def display_title(self) -> str:
        return self.name or ""

    @property
    def display_date(self) -> str | None:
        return self.first_air_date or None

    @property
    def runtime_minutes(self) -> int | None:
        for value in self.episode_run_time:
            if value > 0:
                return value
        return None


MediaDetails = Annotated[Union[MovieDetails, TVDetails], Field(discriminator="media_type")]

_media_details_adapter: TypeAdapter[MovieDetails | TVDetails] = TypeAdapter(MediaDetails)


def parse_media_details(media_type: str, payload: dict[str, Any]) -> MovieDetails | TVDetails:
    """Type a raw TMDb details payload; TMDb omits ``media_type`` on these, so the caller supplies it."""
    return _media_details_adapter.validate_python({**payload, "media_type": media_type})


def parse_search_page(payload: dict[str, Any]) -> SearchPage:
    """Type a raw ``/search/multi`` payload, keeping only movie and tv entries."""
    raw_results = payload.get("results")
    kept = [
        item
        for item in (raw_results if isinstance(raw_results, list) else [])
        if isinstance(item, dict) and item.get("media_type") in MEDIA_TYPES
    ]
    return SearchPage.model_validate({**payload, "results": kept})
