"""SQLAlchemy implementation of SocialLink repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.social_link import SocialLink
from infrastructure.database.models import SocialLinkModel


class SQLAlchemySocialLinkRepository:
    """SQLAlchemy implementation of ISocialLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_all_for_profile(self, profile_id: UUID) -> list[SocialLink]:
        stmt = (
            select(SocialLinkModel)
            .where(SocialLinkModel.profile_id == profile_id)
            .order_by(SocialLinkModel.position, SocialLinkModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            SocialLink(
                id=model.id,
                profile_id=model.profile_id,
                platform=model.platform,
                url=model.url,
                position=model.position,
                created_at=model.created_at,
            )
            for model in result.scalars()
        ]
