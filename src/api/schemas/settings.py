"""Pydantic schemas for Settings API."""

from datetime import datetime
from typing import Any

from pydantic import model_validator

from api.schemas.common import CamelModel, reject_explicit_nulls
from domain.entities.settings import EDITABLE_FIELDS, ProfileStyle


class SettingsUpdate(CamelModel):
    """Schema for a partial Settings update."""

    profile_style: ProfileStyle | None = None
    show_in_public_search: bool | None = None
    email_on_profile_view: bool | None = None
    email_profile_tips: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _no_nulls(cls, values: Any) -> Any:
        return reject_explicit_nulls(values, EDITABLE_FIELDS)

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class SettingsResponse(CamelModel):
    """Schema for Settings response."""

    user_id: str
    profile_style: ProfileStyle
    show_in_public_search: bool
    email_on_profile_view: bool
    email_profile_tips: bool
    created_at: datetime
    updated_at: datetime
