"""
Contribution Store API

FastAPI application exposing the contribution store over HTTP.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.errors import register_error_handlers
from .api.router import api_router
from .config import Settings, get_settings
from .infra.db.repositories.contributor import ContributionStore
from .infra.db.session import close_db, connect_store
from .utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Opens the database and creates the store unless one was injected, in
    which case the injector owns its engine.
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s...", settings.app_name)

    engine = None
    if app.state.store is None:
        engine, app.state.store = await connect_store(settings)

    yield

    if engine is not None:
        await close_db(engine)
        app.state.store = None
    logger.info("Shutting down %s...", settings.app_name)


def create_app(settings: Optional[Settings] = None, store: Optional[ContributionStore] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Contribution Store",
        description="Tracks the start and outcome of contributions per uid",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    register_error_handlers(app)
    app.include_router(api_router)

    return app
