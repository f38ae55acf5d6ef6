"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: str) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_user(self, user_id: str) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def add(self, profile: Profile) -> Profile | None:
        """Insert a profile unless the user already has one.

        Returns None when the uniqueness constraint rejects the row.
        """
        ...

    async def update(self, profile: Profile) -> Profile:
        """Write all mutable fields of an existing profile."""
        ...

    async def delete(self, id: str) -> bool:
        """Delete a profile and return whether a row was removed."""
        ...

    async def search(
        self, query: str | None = None, category: str | None = None
    ) -> list[Profile]:
        """Search public profiles by name/role/business and role category."""
        ...

    async def list_public(self) -> list[Profile]:
        """Get all public profiles."""
        ...
