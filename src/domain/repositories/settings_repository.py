"""Settings repository protocol."""

from typing import Protocol

from domain.entities.settings import UserSettings


class ISettingsRepository(Protocol):
    """Repository interface for UserSettings entities."""

    async def get_by_user(self, user_id: str) -> UserSettings | None:
        """Get a user's settings row."""
        ...

    async def add(self, settings: UserSettings) -> UserSettings | None:
        """Insert settings unless a row exists. Returns None on conflict."""
        ...

    async def update(self, settings: UserSettings) -> UserSettings:
        """Write all mutable fields of existing settings."""
        ...
