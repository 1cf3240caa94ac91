"""Link service layer with business logic.

Every mutation is committed first and then the profile's links are read
back in a fresh unit of work, so callers always render the confirmed
server-side order and never a locally patched copy.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import LinkNotFoundError, ProfileNotFoundError, StoreError
from domain.entities.link import Link
from domain.entities.profile import Profile
from domain.entities.validation import raise_for_errors
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.link_editor import LinkDraft, LinkEditor
from domain.services.ordering import apply_order, editor_listing, next_position, reorder

logger = structlog.get_logger()

# Fields a partial update may explicitly clear; a null for any other field
# means "leave unchanged".
CLEARABLE_FIELDS = frozenset({"price", "image_url"})


@contextmanager
def _reported(event: str, **context: Any) -> Iterator[None]:
    """Log a failed store write before it propagates to the caller."""
    try:
        yield
    except StoreError as exc:
        logger.error(event, error=exc.message, **context)
        raise


class LinkService:
    """Service layer for Link business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_links(self, user_id: UUID, active_only: bool = False) -> list[Link]:
        """Get the user's links in render order.

        With ``active_only`` the result matches the public page; otherwise
        inactive links are included for the dashboard.
        """
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            links = await uow.links.get_all_for_profile(profile.id, active_only=active_only)
        return editor_listing(links)

    async def get_link(self, user_id: UUID, link_id: UUID) -> Link:
        """Get one of the user's links."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            return await self._require_link(uow, profile, link_id)

    async def create_link(self, user_id: UUID, fields: dict[str, Any]) -> Link:
        """Append a new link or product to the end of the user's list."""
        editor = LinkEditor()
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            editor.open_create(profile.id)
            editor.change(**fields)

            async def save(draft: LinkDraft) -> Link:
                siblings = await uow.links.get_all_for_profile(profile.id)
                link = Link(
                    profile_id=profile.id,
                    title=draft.title,
                    url=draft.url,
                    type=draft.type,
                    link_type=draft.link_type,
                    price=draft.price,
                    currency=draft.currency,
                    image_url=draft.image_url,
                    gradient_style=draft.gradient_style,
                    is_active=draft.is_active,
                    position=next_position(siblings),
                )
                created = await uow.links.create(link)
                await uow.commit()
                return created

            saved = await editor.submit(save)
            if saved is None:
                raise_for_errors(editor.errors)

        logger.info(
            "link_created",
            link_id=str(saved.id),
            profile_id=str(profile.id),
            type=saved.type.value,
            position=saved.position,
        )
        return await self._confirmed(profile.id, saved.id)

    async def update_link(self, user_id: UUID, link_id: UUID, changes: dict[str, Any]) -> Link:
        """Edit a link in place. Position is kept and the type cannot change."""
        changes = {k: v for k, v in changes.items() if v is not None or k in CLEARABLE_FIELDS}
        editor = LinkEditor()
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            existing = await self._require_link(uow, profile, link_id)
            editor.open_edit(existing)
            editor.change(**changes)

            async def save(draft: LinkDraft) -> Link:
                existing.title = draft.title
                existing.url = draft.url
                existing.link_type = draft.link_type
                existing.price = draft.price
                existing.currency = draft.currency
                existing.image_url = draft.image_url
                existing.gradient_style = draft.gradient_style
                existing.is_active = draft.is_active
                existing.updated_at = datetime.utcnow()
                updated = await uow.links.update(existing)
                await uow.commit()
                return updated

            saved = await editor.submit(save)
            if saved is None:
                raise_for_errors(editor.errors)

        logger.info("link_updated", link_id=str(link_id), fields=sorted(changes))
        return await self._confirmed(profile.id, link_id)

    async def save_link(
        self, user_id: UUID, fields: dict[str, Any], link_id: UUID | None = None
    ) -> Link:
        """Create when ``link_id`` is None, otherwise update."""
        if link_id is None:
            return await self.create_link(user_id, fields)
        return await self.update_link(user_id, link_id, fields)

    async def delete_link(self, user_id: UUID, link_id: UUID) -> list[Link]:
        """Remove a link. Remaining positions are left as they are."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            await self._require_link(uow, profile, link_id)
            with _reported("link_delete_failed", link_id=str(link_id)):
                await uow.links.delete(link_id)
                await uow.commit()

        logger.info("link_deleted", link_id=str(link_id), profile_id=str(profile.id))
        return await self._reconcile(profile.id)

    async def set_active(self, user_id: UUID, link_id: UUID, is_active: bool) -> list[Link]:
        """Show or hide a link on the public page; its position is untouched."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            await self._require_link(uow, profile, link_id)
            with _reported("link_toggle_failed", link_id=str(link_id), is_active=is_active):
                await uow.links.set_active(link_id, is_active)
                await uow.commit()

        logger.info("link_visibility_changed", link_id=str(link_id), is_active=is_active)
        return await self._reconcile(profile.id)

    async def move_link(self, user_id: UUID, link_id: UUID, new_index: int) -> list[Link]:
        """Drag one link to a new index in the list."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            links = await uow.links.get_all_for_profile(profile.id)
            changes = reorder(links, link_id, new_index)
            if changes:
                with _reported("link_reorder_failed", profile_id=str(profile.id)):
                    await uow.links.set_positions(changes)
                    await uow.commit()

        logger.info(
            "link_moved",
            link_id=str(link_id),
            new_index=new_index,
            changed=len(changes),
        )
        return await self._reconcile(profile.id)

    async def reorder_links(self, user_id: UUID, ordered_ids: list[UUID]) -> list[Link]:
        """Commit a full ordering of the user's links."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            links = await uow.links.get_all_for_profile(profile.id)
            changes = apply_order(links, ordered_ids)
            if changes:
                with _reported("link_reorder_failed", profile_id=str(profile.id)):
                    await uow.links.set_positions(changes)
                    await uow.commit()

        logger.info("links_reordered", profile_id=str(profile.id), changed=len(changes))
        return await self._reconcile(profile.id)

    async def _reconcile(self, profile_id: UUID) -> list[Link]:
        """Read the authoritative list after a write."""
        async with self._uow_factory() as uow:
            links = await uow.links.get_all_for_profile(profile_id)
        return editor_listing(links)

    async def _confirmed(self, profile_id: UUID, link_id: UUID) -> Link:
        for link in await self._reconcile(profile_id):
            if link.id == link_id:
                return link
        raise LinkNotFoundError(str(link_id))

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user_id(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _require_link(self, uow: IUnitOfWork, profile: Profile, link_id: UUID) -> Link:
        """Get a link owned by the profile; other profiles' links look absent."""
        link = await uow.links.get(link_id)
        if not link or link.profile_id != profile.id:
            raise LinkNotFoundError(str(link_id))
        return link
