"""SQLAlchemy implementation of Profile repository."""

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel


def _term(value: str | None) -> str | None:
    """Blank search terms do not filter."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user(self, user_id: str) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def add(self, profile: Profile) -> Profile | None:
        """Insert a profile, relying on the unique user key for exclusivity."""
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            return None
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.role = profile.role
        model.business_name = profile.business_name
        model.work_area = profile.work_area
        model.skills = list(profile.skills)
        model.background_text = profile.background_text
        model.about_text = profile.about_text
        model.summary = profile.summary
        model.avatar_url = profile.avatar_url
        model.initials = profile.initials
        model.is_public = profile.is_public
        model.updated_at = profile.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: str) -> bool:
        """Delete a profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def search(
        self, query: str | None = None, category: str | None = None
    ) -> list[Profile]:
        """Search public profiles.

        ``query`` matches first name, last name, role or business name;
        ``category`` matches role. Both are case-insensitive substring
        matches and combine with AND.
        """
        conditions = [ProfileModel.is_public.is_(True)]

        query = _term(query)
        if query:
            conditions.append(
                or_(
                    ProfileModel.first_name.icontains(query, autoescape=True),
                    ProfileModel.last_name.icontains(query, autoescape=True),
                    ProfileModel.role.icontains(query, autoescape=True),
                    ProfileModel.business_name.icontains(query, autoescape=True),
                )
            )

        category = _term(category)
        if category:
            conditions.append(ProfileModel.role.icontains(category, autoescape=True))

        stmt = (
            select(ProfileModel)
            .where(and_(*conditions))
            .order_by(ProfileModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_public(self) -> list[Profile]:
        """Get all public profiles."""
        return await self.search()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            business_name=model.business_name,
            work_area=model.work_area,
            skills=list(model.skills or []),
            background_text=model.background_text,
            about_text=model.about_text,
            summary=model.summary,
            avatar_url=model.avatar_url,
            initials=model.initials,
            is_public=model.is_public,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            role=entity.role,
            business_name=entity.business_name,
            work_area=entity.work_area,
            skills=list(entity.skills),
            background_text=entity.background_text,
            about_text=entity.about_text,
            summary=entity.summary,
            avatar_url=entity.avatar_url,
            initials=entity.initials,
            is_public=entity.is_public,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
