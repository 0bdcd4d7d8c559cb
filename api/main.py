from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core.config import Settings
from core.db import Database
from core.error_handlers import register_error_handlers
from core.logging_config import setup_logging
from core.middleware import RequestLoggingMiddleware
from genity import router as genity_router
from genity.repository import GenityRepository, PostgresGenityRepository
from genity.service import GenityService
from healthcheck import router as healthcheck_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    *,
    repository: GenityRepository | None = None,
) -> FastAPI:
    """
    Build the application and every component it uses.

    Without an explicit `repository` the app owns a Postgres pool that is
    opened on startup and closed on shutdown.
    """
    setup_logging(settings.log_level, settings.log_format)

    database: Database | None = None
    if repository is None:
        database = Database(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout_s,
        )
        repository = PostgresGenityRepository(database)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if database is not None:
            await database.connect()
        logger.info("api_started version=%s", settings.version)
        try:
            yield
        finally:
            if database is not None:
                await database.close()
            logger.info("api_stopped")

    app = FastAPI(title="genity-api", version=settings.version, lifespan=lifespan)
    app.state.settings = settings
    app.state.genity_service = GenityService(repository, logging.getLogger("genity.service"))

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app)

    app.include_router(healthcheck_router.router, tags=["healthcheck"])
    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(genity_router.router, tags=["genitys"])
    return app


def app_from_env() -> FastAPI:
    """
    Factory for `uvicorn --factory main:app_from_env`.
    """
    return create_app(Settings.from_env())


def run() -> None:
    """
    Serve the API with uvicorn. Host and port come from API_HOST / API_PORT.
    """
    host = os.environ.get("API_HOST", "0.0.0.0")
    port = int(os.environ.get("API_PORT", "8000"))
    uvicorn.run(app_from_env, factory=True, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
