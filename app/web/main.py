"""Server-rendered client for the proxy: a search page and a detail page."""

from __future__ import annotations

import logging
import os

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from app.core.config import Settings
from app.core.logging import configure_logging
from app.web.routes import router

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


def create_web_app(
    settings: Settings | None = None,
    *,
    proxy_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Movie/TV Database", version="0.1.0", docs_url=None, redoc_url=None)
    app.state.settings = settings
    app.state.proxy_transport = proxy_transport
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    app.include_router(router)
    return app


def run() -> None:
    settings = Settings()
    app = create_web_app(settings)
    logger.info("Web client on http://%s:%s using proxy %s", settings.host, settings.web_port, settings.proxy_base_url)
    uvicorn.run(app, host=settings.host, port=settings.web_port)


if __name__ == "__main__":
    run()
