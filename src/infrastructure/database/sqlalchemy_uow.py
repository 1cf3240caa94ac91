"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import StoreError
from infrastructure.database.repositories.sqlalchemy_link_repo import SQLAlchemyLinkRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_social_link_repo import (
    SQLAlchemySocialLinkRepository,
)

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Driver and connection failures escaping the context are re-raised as
    StoreError so the domain layer never sees SQLAlchemy exceptions.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self._require_session())

    @property
    def links(self) -> SQLAlchemyLinkRepository:
        """Get link repository."""
        return SQLAlchemyLinkRepository(self._require_session())

    @property
    def social_links(self) -> SQLAlchemySocialLinkRepository:
        """Get social link repository."""
        return SQLAlchemySocialLinkRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            try:
                await self._session.commit()
            except SQLAlchemyError as exc:
                logger.error("store_commit_failed", error=str(exc))
                raise StoreError("commit") from exc

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if not self._session:
            return
        try:
            if exc_type:
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None

        if isinstance(exc_val, SQLAlchemyError):
            logger.error("store_query_failed", error=str(exc_val), error_type=type(exc_val).__name__)
            raise StoreError("query") from exc_val
