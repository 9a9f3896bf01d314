"""
FastAPI application entrypoint for the image feed companion API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from imagefeed import __version__
from imagefeed.api.routes import oauth_router, router as api_router
from imagefeed.core.config import get_settings
from imagefeed.core.logging import configure_logging
from imagefeed.dependencies import get_http_exchange


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    if get_http_exchange.cache_info().currsize:
        await get_http_exchange().aclose()


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Image Feed",
        version=__version__,
        description="Session, feed and like synchronization for the Unsplash API.",
        lifespan=_lifespan,
    )
    app.include_router(api_router, prefix="/api")
    app.include_router(oauth_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
