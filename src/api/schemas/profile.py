"""Pydantic schemas for Profile API."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, model_validator

from api.schemas.common import CamelModel, reject_explicit_nulls

NON_NULLABLE = frozenset({"first_name", "last_name", "role", "skills", "initials", "is_public"})


class ProfileBase(CamelModel):
    """Fields a worker fills in when creating a profile."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: str = Field(..., min_length=1, max_length=200)
    business_name: str | None = Field(None, max_length=200)
    work_area: str | None = Field(None, max_length=200)
    skills: list[str] = Field(default_factory=list, max_length=50)
    background_text: str | None = Field(None, max_length=5000)
    about_text: str | None = Field(None, max_length=5000)
    summary: str | None = Field(None, max_length=500)
    avatar_url: str | None = Field(None, max_length=1000)
    initials: str | None = Field(None, min_length=1, max_length=8)
    is_public: bool = True


class ProfileCreate(ProfileBase):
    """Schema for creating a Profile."""

    def to_fields(self) -> dict[str, Any]:
        """Fields for the domain entity; omitted optionals keep their defaults."""
        return self.model_dump(exclude_none=True)


class ProfileUpdate(CamelModel):
    """Schema for a partial Profile update. Omitted fields stay unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    role: str | None = Field(None, min_length=1, max_length=200)
    business_name: str | None = Field(None, max_length=200)
    work_area: str | None = Field(None, max_length=200)
    skills: list[str] | None = Field(None, max_length=50)
    background_text: str | None = Field(None, max_length=5000)
    about_text: str | None = Field(None, max_length=5000)
    summary: str | None = Field(None, max_length=500)
    avatar_url: str | None = Field(None, max_length=1000)
    initials: str | None = Field(None, min_length=1, max_length=8)
    is_public: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _required_fields_not_null(cls, values: Any) -> Any:
        return reject_explicit_nulls(values, NON_NULLABLE)

    def to_changes(self) -> dict[str, Any]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class ProfileResponse(CamelModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "Xk2v9fTq1bN0",
                "userId": "Xk2v9fTq1bN0",
                "firstName": "Sara",
                "lastName": "Cohen",
                "role": "Electrician",
                "businessName": "Cohen Electric",
                "workArea": "Tel Aviv",
                "skills": ["Wiring", "Lighting", "Panel upgrades"],
                "backgroundText": None,
                "aboutText": "I have been an electrician for twelve years...",
                "summary": "Licensed electrician serving the Tel Aviv area",
                "avatarUrl": None,
                "initials": "SC",
                "isPublic": True,
                "createdAt": "2026-01-28T10:00:00",
                "updatedAt": "2026-01-28T10:00:00",
            }
        },
    )

    id: str
    user_id: str
    first_name: str
    last_name: str
    role: str
    business_name: str | None = None
    work_area: str | None = None
    skills: list[str]
    background_text: str | None = None
    about_text: str | None = None
    summary: str | None = None
    avatar_url: str | None = None
    initials: str
    is_public: bool
    created_at: datetime
    updated_at: datetime
