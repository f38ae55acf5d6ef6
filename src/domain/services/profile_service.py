"""Profile service layer with business logic."""

from collections.abc import Callable
from typing import Any, Optional

import structlog

from core.exceptions import (
    AuthorizationError,
    ProfileAlreadyExistsError,
    ProfileGenerationError,
    ProfileNotFoundError,
)
from domain.entities.profile import Profile, ProfileDraft
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.settings_service import SettingsService
from infrastructure.ai.generator import IProfileGenerator

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic.

    Every mutation checks that the caller owns the profile.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        generator: IProfileGenerator,
        settings_service: Optional[SettingsService] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._generator = generator
        self._settings = settings_service or SettingsService(uow_factory)

    # --- Reads ---

    async def search(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> list[Profile]:
        """Search the public directory."""
        async with self._uow_factory() as uow:
            return await uow.profiles.search(query, category)  # type: ignore[no-any-return]

    async def list_public(self) -> list[Profile]:
        """Get every public profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.list_public()  # type: ignore[no-any-return]

    async def get_public(self, profile_id: str, viewer_id: Optional[str] = None) -> Profile:
        """Get a profile by ID. Hidden profiles are only visible to their owner."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)

        if not profile:
            raise ProfileNotFoundError(profile_id)
        if not profile.is_public and not profile.is_owned_by(viewer_id or ""):
            raise ProfileNotFoundError(profile_id)
        return profile

    async def get_by_user(self, user_id: str) -> Optional[Profile]:
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_user(user_id)  # type: ignore[no-any-return]

    async def get_for_user(self, user_id: str) -> Profile:
        """Get the caller's own profile."""
        profile = await self.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError()
        return profile

    # --- Writes ---

    async def create(self, user_id: str, fields: dict[str, Any]) -> Profile:
        """Create the caller's profile. A user may own at most one."""
        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_user(user_id):
                raise ProfileAlreadyExistsError(user_id)

            profile = Profile(user_id=user_id, **fields)

            # The unique user key settles concurrent creates
            created = await uow.profiles.add(profile)
            if created is None:
                raise ProfileAlreadyExistsError(user_id)

            await uow.commit()

        logger.info("profile_created", profile_id=created.id, user_id=user_id)
        return created

    async def update(
        self, profile_id: str, user_id: str, changes: dict[str, Any]
    ) -> Profile:
        """Apply a partial update to a profile the caller owns."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)
            if not profile.is_owned_by(user_id):
                raise AuthorizationError()

            profile.apply_changes(changes)
            updated = await uow.profiles.update(profile)
            await uow.commit()

        logger.info("profile_updated", profile_id=profile_id, fields=sorted(changes))
        return updated  # type: ignore[no-any-return]

    async def update_for_user(
        self, user_id: str, changes: dict[str, Any]
    ) -> Optional[Profile]:
        """Apply a partial update to the user's profile, None if absent."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                return None

            profile.apply_changes(changes)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def delete(self, profile_id: str, user_id: str) -> bool:
        """Delete a profile the caller owns."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)
            if not profile.is_owned_by(user_id):
                raise AuthorizationError()

            deleted = await uow.profiles.delete(profile_id)
            await uow.commit()

        logger.info("profile_deleted", profile_id=profile_id)
        return deleted  # type: ignore[no-any-return]

    async def delete_for_user(self, user_id: str) -> bool:
        """Delete the user's profile. False when there was none."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                return False
            deleted = await uow.profiles.delete(profile.id)
            await uow.commit()
            return deleted  # type: ignore[no-any-return]

    # --- AI generation ---

    async def generate_about(self, user_id: str) -> Profile:
        """Regenerate about text, summary and skills for the caller's profile.

        The language model is called outside any transaction. When it fails
        the profile is left untouched.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(message="Profile not found. Create a profile first.")

        style = await self._settings.get_style(user_id)

        try:
            generated = await self._generator.generate(ProfileDraft.from_profile(profile), style)
        except ProfileGenerationError:
            logger.warning("profile_generation_failed", profile_id=profile.id, style=style.value)
            raise

        async with self._uow_factory() as uow:
            current = await uow.profiles.get(profile.id)
            if not current:
                raise ProfileNotFoundError(profile.id)

            current.apply_changes(
                {
                    "about_text": generated.about_text,
                    "summary": generated.summary,
                    "skills": list(generated.skills),
                }
            )
            updated = await uow.profiles.update(current)
            await uow.commit()

        logger.info(
            "profile_generated",
            profile_id=profile.id,
            style=style.value,
            skill_count=len(generated.skills),
        )
        return updated  # type: ignore[no-any-return]
