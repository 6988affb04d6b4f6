from __future__ import annotations

import logging

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_mcp import FastApiMCP

from app.api.deps import CONFIG_ERROR_MESSAGE
from app.api.http_errors import register_exception_handlers
from app.api.routes.health import router as health_router
from app.api.routes.tmdb import router as tmdb_router
from app.core.config import Settings
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _is_api_path(path: str) -> bool:
    return path == API_PREFIX or path.startswith(f"{API_PREFIX}/")


def create_app(
    settings: Settings | None = None,
    *,
    tmdb_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Movie/TV Metadata Proxy", version="0.1.0")
    app.state.settings = settings
    app.state.tmdb_transport = tmdb_transport

    if not settings.has_tmdb_credentials():
        logger.error("TMDB_API_KEY is not set; all %s requests will be refused.", API_PREFIX)

    @app.middleware("http")
    async def require_tmdb_credentials(request: Request, call_next):
        # Checked before routing so unknown /api paths are refused too.
        if _is_api_path(request.url.path) and not request.app.state.settings.has_tmdb_credentials():
            return JSONResponse(status_code=503, content={"message": CONFIG_ERROR_MESSAGE})
        return await call_next(request)

    cors_origins = settings.cors_origin_list()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(tmdb_router)

    if settings.mcp_enabled:
        mcp = FastApiMCP(app, name="Movie/TV Metadata Proxy", include_tags=["tmdb"])
        mcp.mount_http()

    return app


def run() -> None:
    settings = Settings()
    app = create_app(settings)
    logger.info("Search API at http://%s:%s%s/search?query=inception", settings.host, settings.port, API_PREFIX)
    logger.info("Details API at http://%s:%s%s/details/movie/27205", settings.host, settings.port, API_PREFIX)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
