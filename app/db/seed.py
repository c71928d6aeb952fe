"""Database bootstrap: table creation and the seeded test user."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.core.auth import get_password_hash
from app.db.base import Base
from app.db.models.user import User

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_test_user(session: AsyncSession, name: str, email: str, password: str) -> User:
    """Insert the test user unless a user with that email already exists.

    Returns:
        The existing or newly created User.
    """
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is not None:
        return user

    user = User(name=name, email=email, hashed_password=get_password_hash(password))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("Seeded test user", extra={"user_id": user.id})
    return user
