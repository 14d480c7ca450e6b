"""
FastAPI application factory.
"""

import random
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from shared.config import Settings, get_settings
from shared.database import Database
from shared.llm import LLMClient

from .errors import register_exception_handlers
from .routes import ai, auth, career, user

API_PREFIX = "/api"


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    llm: Optional[LLMClient] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings override (defaults to environment)
        database: Pre-built database; when omitted one is connected on startup
        llm: LLM client override
        rng: Random source for trending-skill growth figures
    """
    settings = settings or get_settings()
    owns_database = database is None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if owns_database:
            db = Database(settings)
            await db.connect()
            await db.ensure_indexes()
            app.state.db = db
        if not settings.llm_configured:
            logger.warning("OPENAI_API_KEY not set, AI features will degrade or fail")
        logger.info("Career Coach API started")
        try:
            yield
        finally:
            if owns_database:
                await app.state.db.disconnect()
            logger.info("Career Coach API stopped")

    app = FastAPI(title="Career Coach API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database
    app.state.llm = llm or LLMClient(settings=settings)
    app.state.rng = rng or random.Random()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for module in (auth, career, user, ai):
        app.include_router(module.router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health", tags=["health"])
    async def health():
        return {"success": True, "status": "ok", "message": "Career Coach API is running"}

    return app
