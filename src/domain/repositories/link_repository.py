"""Link repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.link import Link, PositionChange


class ILinkRepository(Protocol):
    """Repository interface for Link entities.

    Writes are single-row; ``set_positions`` issues one update per change.
    """

    async def get(self, id: UUID) -> Link | None:
        """Get a link by ID."""
        ...

    async def get_all_for_profile(self, profile_id: UUID, active_only: bool = False) -> list[Link]:
        """Get a profile's links ordered by position (ties broken by id)."""
        ...

    async def create(self, link: Link) -> Link:
        """Create a new link."""
        ...

    async def update(self, link: Link) -> Link:
        """Update an existing link."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a link and return success status."""
        ...

    async def set_active(self, id: UUID, is_active: bool) -> bool:
        """Flip the visibility flag. Returns False if the link does not exist."""
        ...

    async def set_positions(self, changes: list[PositionChange]) -> None:
        """Write new positions, one row at a time."""
        ...
