"""Profile domain entity."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from domain.entities.validation import FieldError, raise_for_errors

USERNAME_PATTERN = re.compile(r"[a-z0-9_]+")
BIO_MAX_LENGTH = 200


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class BackgroundStyle(StrEnum):
    SOLID = "solid"
    GRADIENT = "gradient"
    DOTS = "dots"


@dataclass
class Profile:
    """Domain entity for the public page owner. One per authenticated user."""

    user_id: UUID
    username: str
    id: UUID = field(default_factory=uuid4)
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    theme: Theme = Theme.LIGHT
    background_style: BackgroundStyle = BackgroundStyle.SOLID
    background_color: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def title(self) -> str:
        """Name shown as the page heading."""
        return self.display_name or self.username

    @property
    def initial(self) -> str:
        """Avatar placeholder letter."""
        return self.username[:1].upper() or "?"

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


def is_valid_username(username: str) -> bool:
    return USERNAME_PATTERN.fullmatch(username) is not None


def validate_profile(fields: Mapping[str, Any]) -> list[FieldError]:
    """Validate a partial profile. Only the keys present are checked."""
    errors: list[FieldError] = []

    username = fields.get("username")
    if username is not None and not is_valid_username(username):
        errors.append(FieldError("username", "format"))

    bio = fields.get("bio")
    if bio is not None and len(bio) > BIO_MAX_LENGTH:
        errors.append(FieldError("bio", "too_long"))

    theme = fields.get("theme")
    if theme is not None and theme not in {t.value for t in Theme}:
        errors.append(FieldError("theme", "unsupported"))

    background_style = fields.get("background_style")
    if (
        background_style is not None
        and background_style not in {s.value for s in BackgroundStyle}
    ):
        errors.append(FieldError("background_style", "unsupported"))

    return errors


def ensure_valid_profile(fields: Mapping[str, Any]) -> None:
    raise_for_errors(validate_profile(fields))
