from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from app.core.config import settings
from app.db.seed import create_tables, seed_test_user
from app.db.session import dispose_engine, get_engine, get_session_maker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """FastAPI lifespan context manager for startup/shutdown events."""
    try:
        # Startup
        if settings.environment != "test":
            await verify_database_connection()
        if settings.seed_database:
            await seed_database()
        log_integration_status(app)
        yield

        # Shutdown
    finally:
        await dispose_engine()


async def verify_database_connection() -> None:
    """Verify database connectivity at startup. Raises if connection fails."""
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        raise RuntimeError(f"Failed to connect to database: {e}") from e


async def seed_database() -> None:
    """Create missing tables and make sure the test user exists."""
    await create_tables(get_engine())
    async with get_session_maker()() as session:
        await seed_test_user(
            session,
            name=settings.seed_user_name,
            email=settings.seed_user_email,
            password=settings.seed_user_password,
        )


def log_integration_status(app: FastAPI) -> None:
    services = getattr(app.state, "services", {})
    openai_service = services.get("openai_service")
    if openai_service is None:
        return
    status = openai_service.get_status()
    logger.info("OpenAI integration status", extra=status.model_dump())
    if not status.configured:
        logger.warning("OPENAI_API_KEY is not set; OpenAI integration is disabled")
