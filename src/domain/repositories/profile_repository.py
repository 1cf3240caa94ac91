"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by username (case-insensitive)."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a profile. Raises UsernameTakenError on a duplicate username."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update a profile. Raises UsernameTakenError on a duplicate username."""
        ...
