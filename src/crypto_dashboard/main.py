"""Main module for the crypto dashboard service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from crypto_dashboard.config import load_settings
from crypto_dashboard.container import Container, init_container
from crypto_dashboard.routers import (assets_router, dashboard_router,
                                      settings_router, watchlists_router)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Load the dashboard session at startup; close the provider on shutdown."""
    container: Container = fastapi_app.state.container
    result = await container.dashboard_controller().load()
    if not result.ok:
        logger.warning("Initial dashboard load failed: %s", result.message)

    yield

    try:
        await container.asset_repository().close()
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Error closing asset provider: %s", exc)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app around a container (a fresh one by default)."""
    fastapi_app = FastAPI(
        title="Crypto Dashboard",
        description="Asset table, narrative heatmap, watchlists and refresh settings",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or init_container()

    fastapi_app.include_router(assets_router)
    fastapi_app.include_router(watchlists_router)
    fastapi_app.include_router(settings_router)
    fastapi_app.include_router(dashboard_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Installed as the `start` script."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("crypto_dashboard.main:app", host=settings.host, port=settings.port)
