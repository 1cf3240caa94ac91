"""Social link repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.social_link import SocialLink


class ISocialLinkRepository(Protocol):
    """Read-only repository interface for SocialLink entities."""

    async def get_all_for_profile(self, profile_id: UUID) -> list[SocialLink]:
        """Get a profile's social links ordered by position."""
        ...
