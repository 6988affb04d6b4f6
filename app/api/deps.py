from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
from fastapi import Depends, Request

from app.core.config import Settings
from app.core.errors import ConfigurationError
from app.services.tmdb import build_tmdb_client

CONFIG_ERROR_MESSAGE = "Server configuration error: TMDB API key missing."


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_tmdb_api_key(settings: Settings = Depends(get_settings)) -> str:
    if not settings.tmdb_api_key:
        raise ConfigurationError(CONFIG_ERROR_MESSAGE)
    return settings.tmdb_api_key


async def get_tmdb_client(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = getattr(request.app.state, "tmdb_transport", None)
    async with build_tmdb_client(settings, transport=transport) as client:
        yield client
