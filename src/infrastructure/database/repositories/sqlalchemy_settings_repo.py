"""SQLAlchemy implementation of Settings repository."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.settings import ProfileStyle, UserSettings
from infrastructure.database.models import SettingsModel


class SQLAlchemySettingsRepository:
    """SQLAlchemy implementation of ISettingsRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: str) -> UserSettings | None:
        """Get a user's settings row."""
        stmt = select(SettingsModel).where(SettingsModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def add(self, settings: UserSettings) -> UserSettings | None:
        """Insert settings unless the user already has a row."""
        model = self._to_model(settings)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            return None
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, settings: UserSettings) -> UserSettings:
        """Update existing settings."""
        stmt = select(SettingsModel).where(SettingsModel.user_id == settings.user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Settings for {settings.user_id} not found")

        model.profile_style = settings.profile_style.value
        model.show_in_public_search = settings.show_in_public_search
        model.email_on_profile_view = settings.email_on_profile_view
        model.email_profile_tips = settings.email_profile_tips
        model.updated_at = settings.updated_at

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: SettingsModel) -> UserSettings:
        """Convert ORM model to domain entity."""
        return UserSettings(
            id=model.id,
            user_id=model.user_id,
            profile_style=ProfileStyle(model.profile_style),
            show_in_public_search=model.show_in_public_search,
            email_on_profile_view=model.email_on_profile_view,
            email_profile_tips=model.email_profile_tips,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: UserSettings) -> SettingsModel:
        """Convert domain entity to ORM model."""
        return SettingsModel(
            id=entity.id,
            user_id=entity.user_id,
            profile_style=entity.profile_style.value,
            show_in_public_search=entity.show_in_public_search,
            email_on_profile_view=entity.email_on_profile_view,
            email_profile_tips=entity.email_profile_tips,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
