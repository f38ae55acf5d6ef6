"""Settings service layer."""

from collections.abc import Callable
from typing import Any

import structlog

from domain.entities.settings import ProfileStyle, UserSettings
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class SettingsService:
    """Get-or-create and partial updates over the settings store."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_or_create(self, user_id: str) -> UserSettings:
        """Read the user's settings, persisting defaults on first access."""
        async with self._uow_factory() as uow:
            existing = await uow.settings.get_by_user(user_id)
            if existing:
                return existing

            created = await uow.settings.add(UserSettings(user_id=user_id))
            if created is None:
                # A concurrent request created the row first
                winner = await uow.settings.get_by_user(user_id)
                if winner is None:
                    raise RuntimeError(f"Settings for {user_id} vanished after conflict")
                return winner

            await uow.commit()

        logger.info("settings_created", user_id=user_id)
        return created

    async def get_style(self, user_id: str) -> ProfileStyle:
        """Preferred generation style; no row is written when absent."""
        async with self._uow_factory() as uow:
            current = await uow.settings.get_by_user(user_id)
        return current.profile_style if current else ProfileStyle.SIMPLE

    async def update(self, user_id: str, changes: dict[str, Any]) -> UserSettings:
        """Merge supplied fields, creating the row from defaults if needed."""
        async with self._uow_factory() as uow:
            current = await uow.settings.get_by_user(user_id)
            if current is None:
                fresh = UserSettings(user_id=user_id)
                fresh.apply_changes(changes)
                created = await uow.settings.add(fresh)
                if created is not None:
                    await uow.commit()
                    return created
                current = await uow.settings.get_by_user(user_id)
                if current is None:
                    raise RuntimeError(f"Settings for {user_id} vanished after conflict")

            current.apply_changes(changes)
            updated = await uow.settings.update(current)
            await uow.commit()
            return updated  # type: ignore[no-any-return]
