"""Profile service layer with business logic."""

import re
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, StoreError, UsernameTakenError
from domain.entities.link import Link
from domain.entities.profile import (
    BackgroundStyle,
    Profile,
    Theme,
    ensure_valid_profile,
)
from domain.entities.social_link import SocialLink
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.ordering import public_listing

logger = structlog.get_logger()

USERNAME_ALPHABET = string.ascii_lowercase + string.digits
USERNAME_PREFIX_MAX = 40
UPDATABLE_FIELDS = frozenset(
    {
        "username",
        "display_name",
        "bio",
        "avatar_url",
        "theme",
        "background_style",
        "background_color",
    }
)


@dataclass
class PublicPage:
    """Everything the public page at /{username} renders."""

    profile: Profile
    links: list[Link] = field(default_factory=list)
    social_links: list[SocialLink] = field(default_factory=list)


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(USERNAME_ALPHABET) for _ in range(length))


def generate_username(email: str | None, suffix_length: int = 4) -> str:
    """Derive a username from an email address plus a random suffix.

    ``jane.doe@example.com`` becomes something like ``janedoe_k3x9``. Without
    a usable email the result is ``user_`` and a longer suffix.
    """
    local = (email or "").split("@")[0].lower()
    local = re.sub(r"[^a-z0-9_]", "", local)[:USERNAME_PREFIX_MAX]
    if not local:
        return f"user_{_random_suffix(suffix_length + 2)}"
    return f"{local}_{_random_suffix(suffix_length)}"


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        username_suffix_length: int = 4,
        create_attempts: int = 3,
    ) -> None:
        self._uow_factory = uow_factory
        self._suffix_length = username_suffix_length
        self._create_attempts = create_attempts

    async def get_or_create_for_user(self, user_id: UUID, email: str | None = None) -> Profile:
        """Get the user's profile, creating one on the first dashboard visit.

        The username is generated from the email; on a collision a new
        suffix is tried, up to the configured number of attempts.
        """
        existing = await self._find_for_user(user_id)
        if existing:
            return existing

        username = generate_username(email, self._suffix_length)
        for attempt in range(1, self._create_attempts + 1):
            if attempt > 1:
                username = generate_username(email, self._suffix_length)
            try:
                return await self._create(user_id, username, email)
            except UsernameTakenError:
                logger.info("profile_username_collision", username=username, attempt=attempt)
            except StoreError:
                # Only one profile per user_id; a second insert fails on that index
                existing = await self._find_for_user(user_id)
                if not existing:
                    raise
                logger.info("profile_created_concurrently", user_id=str(user_id))
                return existing

            # A concurrent request from the same user may have won the race
            existing = await self._find_for_user(user_id)
            if existing:
                return existing

        raise UsernameTakenError(username)

    async def _find_for_user(self, user_id: UUID) -> Profile | None:
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_user_id(user_id)

    async def _create(self, user_id: UUID, username: str, email: str | None) -> Profile:
        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_username(username):
                raise UsernameTakenError(username)

            local = (email or "").split("@")[0]
            profile = Profile(
                user_id=user_id,
                username=username,
                display_name=local or "New User",
            )
            ensure_valid_profile({"username": profile.username})
            created = await uow.profiles.create(profile)
            await uow.commit()

        logger.info("profile_created", profile_id=str(created.id), username=created.username)
        return created

    async def update_profile(self, user_id: UUID, changes: dict[str, Any]) -> Profile:
        """Apply a partial update to the user's profile."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")

        changes = dict(changes)
        if changes.get("username") is not None:
            changes["username"] = changes["username"].strip().lower()
        ensure_valid_profile(changes)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            new_username = changes.get("username")
            if new_username is not None and new_username != profile.username:
                taken = await uow.profiles.get_by_username(new_username)
                if taken and taken.id != profile.id:
                    raise UsernameTakenError(new_username)
                profile.username = new_username

            for name in ("display_name", "bio", "avatar_url", "background_color"):
                if name in changes:
                    setattr(profile, name, changes[name])
            if changes.get("theme") is not None:
                profile.theme = Theme(changes["theme"])
            if changes.get("background_style") is not None:
                profile.background_style = BackgroundStyle(changes["background_style"])

            profile.updated_at = datetime.utcnow()
            updated = await uow.profiles.update(profile)
            await uow.commit()

        logger.info("profile_updated", profile_id=str(updated.id), fields=sorted(changes))
        return updated

    async def get_public_page(self, username: str) -> PublicPage:
        """Resolve a public page by username.

        Only active links are included. A missing profile is final; callers
        render "not found" and do not retry.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(username.strip().lower())
            if not profile:
                raise ProfileNotFoundError(username)

            links = await uow.links.get_all_for_profile(profile.id, active_only=True)
            social_links = await uow.social_links.get_all_for_profile(profile.id)

        return PublicPage(
            profile=profile,
            links=public_listing(links),
            social_links=sorted(social_links, key=lambda s: (s.position, str(s.id))),
        )

    async def get_social_links(self, user_id: UUID) -> list[SocialLink]:
        """Social links for the user's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            social_links = await uow.social_links.get_all_for_profile(profile.id)
        return sorted(social_links, key=lambda s: (s.position, str(s.id)))
