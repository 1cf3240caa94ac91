"""SQLAlchemy implementation of Link repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.link import (
    Currency,
    GradientStyle,
    Link,
    LinkCategory,
    LinkKind,
    PositionChange,
)
from infrastructure.database.models import LinkModel


def _currency(value: str | None) -> Currency | None:
    if value is None:
        return None
    try:
        return Currency(value.upper())
    except ValueError:
        return Currency.USD


class SQLAlchemyLinkRepository:
    """SQLAlchemy implementation of ILinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Link | None:
        """Get a link by ID."""
        stmt = select(LinkModel).where(LinkModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_profile(self, profile_id: UUID, active_only: bool = False) -> list[Link]:
        """Get a profile's links in render order."""
        stmt = select(LinkModel).where(LinkModel.profile_id == profile_id)
        if active_only:
            stmt = stmt.where(LinkModel.is_active.is_(True))
        # UUIDs compare bytewise, which matches the lexical order of their hex form
        stmt = stmt.order_by(LinkModel.position, LinkModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, link: Link) -> Link:
        """Create a new link."""
        model = self._to_model(link)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, link: Link) -> Link:
        """Update an existing link. The type column is never rewritten."""
        stmt = select(LinkModel).where(LinkModel.id == link.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Link {link.id} not found")

        model.title = link.title
        model.url = link.url
        model.link_type = link.link_type.value if link.link_type else None
        model.price = link.price
        model.currency = link.currency.value if link.currency else None
        model.image_url = link.image_url
        model.gradient_style = link.gradient_style.value
        model.position = link.position
        model.is_active = link.is_active
        model.updated_at = link.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a link."""
        stmt = select(LinkModel).where(LinkModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def set_active(self, id: UUID, is_active: bool) -> bool:
        """Flip the visibility flag."""
        stmt = (
            update(LinkModel)
            .where(LinkModel.id == id)
            .values(is_active=is_active, updated_at=datetime.utcnow())
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def set_positions(self, changes: list[PositionChange]) -> None:
        """Write new positions with one UPDATE per row."""
        now = datetime.utcnow()
        for change in changes:
            stmt = (
                update(LinkModel)
                .where(LinkModel.id == change.link_id)
                .values(position=change.new_position, updated_at=now)
            )
            await self._session.execute(stmt)

    def _to_entity(self, model: LinkModel) -> Link:
        """Convert ORM model to domain entity."""
        return Link(
            id=model.id,
            profile_id=model.profile_id,
            title=model.title,
            url=model.url,
            type=LinkKind(model.type),
            link_type=(
                LinkCategory.parse(model.link_type) if model.link_type else LinkCategory.WEBSITE
            ),
            price=model.price,
            currency=_currency(model.currency),
            image_url=model.image_url,
            gradient_style=GradientStyle.parse(model.gradient_style),
            position=model.position,
            is_active=model.is_active,
            clicks=model.clicks,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Link) -> LinkModel:
        """Convert domain entity to ORM model."""
        return LinkModel(
            id=entity.id,
            profile_id=entity.profile_id,
            title=entity.title,
            url=entity.url,
            type=entity.type.value,
            link_type=entity.link_type.value if entity.link_type else None,
            price=entity.price,
            currency=entity.currency.value if entity.currency else None,
            image_url=entity.image_url,
            gradient_style=entity.gradient_style.value,
            position=entity.position,
            is_active=entity.is_active,
            clicks=entity.clicks,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
