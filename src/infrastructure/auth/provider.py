"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Identity taken from a verified access token."""

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None

    @property
    def email_local_part(self) -> str | None:
        if not self.email:
            return None
        return self.email.split("@")[0] or None


class IAuthProvider(Protocol):
    """Protocol for the external identity service."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a bearer token.

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        ...
