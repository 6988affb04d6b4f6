from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.client.proxy import ProxyClient
from app.client.views import DetailsView, SearchView
from app.core.config import Settings

router = APIRouter(tags=["web"])

OVERVIEW_PREVIEW_CHARS = 150


def get_web_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_proxy_client(
    request: Request,
    settings: Settings = Depends(get_web_settings),
) -> AsyncGenerator[ProxyClient, None]:
    transport = getattr(request.app.state, "proxy_transport", None)
    async with ProxyClient.from_settings(settings, transport=transport) as proxy:
        yield proxy


def _templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


def _overview_preview(overview: str | None) -> str:
    if not overview:
        return "No overview available."
    return f"{overview[:OVERVIEW_PREVIEW_CHARS]}..."


@router.get("/", response_class=HTMLResponse)
async def search_page(
    request: Request,
    query: str | None = Query(None),
    proxy: ProxyClient = Depends(get_proxy_client),
    settings: Settings = Depends(get_web_settings),
):
    view = SearchView(proxy)
    if query is not None:
        await view.submit(query)

    return _templates(request).TemplateResponse(
        request,
        "search.html",
        {
            "state": view.state,
            "image_base_url": settings.tmdb_image_base_url,
            "overview_preview": _overview_preview,
        },
    )


@router.get("/details/{media_type}/{item_id}", response_class=HTMLResponse)
async def details_page(
    request: Request,
    media_type: str,
    item_id: str,
    proxy: ProxyClient = Depends(get_proxy_client),
    settings: Settings = Depends(get_web_settings),
):
    view = DetailsView(proxy)
    state = await view.load(media_type, item_id)

    return _templates(request).TemplateResponse(
        request,
        "details.html",
        {
            "state": state,
            "type_label": "Movie" if media_type == "movie" else "TV Show",
            "image_base_url": settings.tmdb_image_base_url,
        },
    )
