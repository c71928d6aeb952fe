"""Per-request transaction scope and the services bound to it."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping
from functools import cached_property
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session_maker
from app.services.auth_service import AuthService


class UnitOfWork:
    """One database session per request; services from `app.state.services` are bound to it."""

    def __init__(self, session: AsyncSession, services: Mapping[str, Any]) -> None:
        self.session = session
        self._services = services

    @cached_property
    def auth_service(self) -> AuthService:
        factory: Callable[[AsyncSession], AuthService] = self._services["auth_service"]
        return factory(self.session)


async def get_uow(request: Request) -> AsyncIterator[UnitOfWork]:
    """Yield a unit of work inside a transaction.

    The transaction commits when the route returns and rolls back when it raises.
    """
    session_maker = get_session_maker()
    async with session_maker.begin() as session:
        yield UnitOfWork(session, request.app.state.services)
