"""Pydantic schemas for the current-user endpoint."""

from api.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Identity of the authenticated caller."""

    id: str
    email: str | None = None
    name: str | None = None
    avatar_url: str | None = None
