"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StoreError, UsernameTakenError
from domain.entities.profile import BackgroundStyle, Profile, Theme
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by username, ignoring case."""
        stmt = select(ProfileModel).where(
            func.lower(ProfileModel.username) == username.strip().lower()
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._flush_unique(profile)
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.username = profile.username
        model.display_name = profile.display_name
        model.bio = profile.bio
        model.avatar_url = profile.avatar_url
        model.theme = profile.theme.value
        model.background_style = profile.background_style.value
        model.background_color = profile.background_color
        model.updated_at = profile.updated_at

        await self._flush_unique(profile)
        return self._to_entity(model)

    async def _flush_unique(self, profile: Profile) -> None:
        """Flush, turning a username unique violation into UsernameTakenError."""
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            owner = await self.get_by_username(profile.username)
            if owner and owner.user_id != profile.user_id:
                raise UsernameTakenError(profile.username) from exc
            raise StoreError("save_profile", "Profile could not be saved") from exc

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            username=model.username,
            display_name=model.display_name,
            bio=model.bio,
            avatar_url=model.avatar_url,
            theme=Theme(model.theme) if model.theme else Theme.LIGHT,
            background_style=(
                BackgroundStyle(model.background_style)
                if model.background_style
                else BackgroundStyle.SOLID
            ),
            background_color=model.background_color,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            username=entity.username,
            display_name=entity.display_name,
            bio=entity.bio,
            avatar_url=entity.avatar_url,
            theme=entity.theme.value,
            background_style=entity.background_style.value,
            background_color=entity.background_color,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
