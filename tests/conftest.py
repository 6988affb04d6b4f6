from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.main import create_app
from app.web.main import create_web_app

TEST_API_KEY = "test-api-key"
TMDB_TEST_BASE_URL = "https://tmdb.test/3"
PROXY_TEST_BASE_URL = "http://proxy.test/api"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "ENV": "test",
        "TMDB_API_KEY": TEST_API_KEY,
        "TMDB_BASE_URL": TMDB_TEST_BASE_URL,
        "PROXY_BASE_URL": PROXY_TEST_BASE_URL,
        "CORS_ORIGINS": "*",
        "MCP_ENABLED": False,
    }
    values.update(overrides)
    # Ignore any developer .env so tests see exactly these values.
    return Settings(_env_file=None, **values)


class FakeTMDb:
    """Records upstream requests and answers them from canned routes keyed by URL path."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, dict[str, Any] | Exception] = {}

    def respond(self, path: str, *, status_code: int = 200, json: Any = None, text: str | None = None) -> None:
        self._routes[path] = {"status_code": status_code, "json": json, "text": text}

    def fail(self, path: str, exc: Exception) -> None:
        self._routes[path] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(request.url.path)
        if route is None:
            return httpx.Response(
                404,
                json={"success": False, "status_code": 34, "status_message": "The resource you requested could not be found."},
            )
        if isinstance(route, Exception):
            raise route
        if route["text"] is not None:
            return httpx.Response(route["status_code"], text=route["text"])
        return httpx.Response(route["status_code"], json=route["json"])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def tmdb() -> FakeTMDb:
    return FakeTMDb()


@pytest.fixture
def app_factory(tmdb):
    def _create(**overrides: Any):
        return create_app(make_settings(**overrides), tmdb_transport=tmdb.transport)

    return _create


@pytest.fixture
def client_factory(app_factory):
    @asynccontextmanager
    async def _factory(*, raise_app_exceptions: bool = True, **overrides: Any):
        transport = ASGITransport(app=app_factory(**overrides), raise_app_exceptions=raise_app_exceptions)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

    return _factory


@pytest.fixture
async def async_client(client_factory):
    async with client_factory() as c:
        yield c


@pytest.fixture
def web_client_factory(app_factory):
    """Web client wired to an in-process proxy app, which is wired to the fake TMDb."""

    @asynccontextmanager
    async def _factory(**overrides: Any):
        proxy_app = app_factory(**overrides)
        web_app = create_web_app(
            make_settings(**overrides),
            proxy_transport=ASGITransport(app=proxy_app),
        )
        transport = ASGITransport(app=web_app)
        async with AsyncClient(transport=transport, base_url="http://web.test") as c:
            yield c

    return _factory


@pytest.fixture
async def web_client(web_client_factory):
    async with web_client_factory() as c:
        yield c


@pytest.fixture
def inception_search_payload() -> dict[str, Any]:
    return {
        "page": 1,
        "results": [
            {
                "id": 27205,
                "media_type": "movie",
                "title": "Inception",
                "release_date": "2010-07-15",
                "poster_path": "/inception.jpg",
                "overview": "Cobb, a skilled thief who commits corporate espionage by infiltrating the subconscious of his targets.",
                "vote_average": 8.4,
            },
            {
                "id": 1396,
                "media_type": "tv",
                "name": "Inception: The Series",
                "first_air_date": "2012-01-20",
                "poster_path": None,
                "overview": "",
            },
            {
                "id": 525,
                "media_type": "person",
                "name": "Christopher Nolan",
                "known_for_department": "Directing",
            },
        ],
        "total_pages": 1,
        "total_results": 3,
    }


@pytest.fixture
def inception_details_payload() -> dict[str, Any]:
    return {
        "id": 27205,
        "title": "Inception",
        "tagline": "Your mind is the scene of the crime.",
        "overview": "Cobb, a skilled thief who commits corporate espionage.",
        "release_date": "2010-07-15",
        "runtime": 148,
        "budget": 160000000,
        "revenue": 825532764,
        "vote_average": 8.369,
        "status": "Released",
        "poster_path": "/inception.jpg",
        "backdrop_path": "/inception-backdrop.jpg",
        "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
        "production_companies": [
            {"id": 923, "name": "Legendary Pictures", "logo_path": "/legendary.png", "origin_country": "US"},
        ],
    }


@pytest.fixture
def breaking_bad_details_payload() -> dict[str, Any]:
    return {
        "id": 1396,
        "name": "Breaking Bad",
        "overview": "A chemistry teacher turned meth producer.",
        "first_air_date": "2008-01-20",
        "episode_run_time": [0, 47],
        "number_of_seasons": 5,
        "number_of_episodes": 62,
        "vote_average": 8.9,
        "genres": [{"id": 18, "name": "Drama"}],
    }
