"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.link_repository import ILinkRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.social_link_repository import ISocialLinkRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions.

    Store failures inside the context surface as StoreError.
    """

    profiles: IProfileRepository
    links: ILinkRepository
    social_links: ISocialLinkRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
