"""Matchbox API: FastAPI application for likes, matches and direct conversations.

Invariants:
    - Routers are included explicitly, one per resource
    - Logging is configured and the engine created before the first request
    - The engine is disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matchbox.api.error_handlers import register_error_handlers
from matchbox.api.routes import conversations, health, likes, matches
from matchbox.config import get_settings
from matchbox.infrastructure import database
from matchbox.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    logger.info(
        "Matchbox API started",
        extra={"operation": "startup"},
    )
    try:
        yield
    finally:
        if database.db_manager is not None:
            await database.db_manager.dispose()
        logger.info("Matchbox API stopped", extra={"operation": "shutdown"})


def create_app() -> FastAPI:
    application = FastAPI(title="Matchbox API", version="1.0.0", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for module in (health, conversations, matches, likes):
        application.include_router(module.router)
    register_error_handlers(application)
    return application


app = create_app()
