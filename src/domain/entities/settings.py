"""User settings domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

EDITABLE_FIELDS = frozenset(
    {
        "profile_style",
        "show_in_public_search",
        "email_on_profile_view",
        "email_profile_tips",
    }
)


class ProfileStyle(StrEnum):
    """Verbosity of AI-generated profile text."""

    SIMPLE = "simple"
    DETAILED = "detailed"


@dataclass
class UserSettings:
    """Per-user display and notification preferences."""

    user_id: str
    id: str = ""
    profile_style: ProfileStyle = ProfileStyle.SIMPLE
    show_in_public_search: bool = True
    email_on_profile_view: bool = False
    email_profile_tips: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if not self.id:
            self.id = self.user_id
        self.profile_style = ProfileStyle(self.profile_style)

    def apply_changes(self, changes: dict[str, object]) -> None:
        """Merge supplied fields only and stamp ``updated_at``."""
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise ValueError(f"Setting cannot be updated: {name}")
            setattr(self, name, value)
        self.profile_style = ProfileStyle(self.profile_style)
        self.updated_at = datetime.utcnow()
