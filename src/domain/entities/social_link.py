"""Social link domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class SocialLink:
    """Icon link shown under the profile header (read-only here)."""

    profile_id: UUID
    platform: str
    url: str
    id: UUID = field(default_factory=uuid4)
    position: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
