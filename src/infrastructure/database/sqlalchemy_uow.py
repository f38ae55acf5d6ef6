"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.repositories.sqlalchemy_settings_repo import (
    SQLAlchemySettingsRepository,
)


class SQLAlchemyUnitOfWork:
    """One session, and the repositories bound to it, per ``async with`` block.

    Nothing is committed implicitly: callers commit, and an exception
    leaving the block rolls the session back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._profiles: Optional[SQLAlchemyProfileRepository] = None
        self._settings: Optional[SQLAlchemySettingsRepository] = None

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        if self._profiles is None:
            raise RuntimeError("UnitOfWork not started; use it as an async context manager")
        return self._profiles

    @property
    def settings(self) -> SQLAlchemySettingsRepository:
        if self._settings is None:
            raise RuntimeError("UnitOfWork not started; use it as an async context manager")
        return self._settings

    async def commit(self) -> None:
        if self._session is not None:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session is not None:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        session = self._session_factory()
        self._session = session
        self._profiles = SQLAlchemyProfileRepository(session)
        self._settings = SQLAlchemySettingsRepository(session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        session, self._session = self._session, None
        self._profiles = self._settings = None
        if session is None:
            return
        try:
            if exc_type is not None:
                await session.rollback()
        finally:
            await session.close()
