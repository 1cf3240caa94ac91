"""Shared fixtures for unit tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.link import Link, LinkKind
from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.links = AsyncMock()
        self.social_links = AsyncMock()
        self.commits = 0
        self.rolled_back = False

    @property
    def committed(self) -> bool:
        return self.commits > 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork, shared by every unit of work a service opens."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, username="jane_k3x9", display_name="Jane")


@pytest.fixture
def make_link() -> Callable[..., Link]:
    """Factory for links with sensible defaults."""

    def _make(profile_id: UUID, position: int, **kwargs: Any) -> Link:
        kwargs.setdefault("title", f"Link {position}")
        kwargs.setdefault("url", f"https://example.com/{position}")
        kwargs.setdefault("type", LinkKind.LINK)
        return Link(profile_id=profile_id, position=position, **kwargs)

    return _make
