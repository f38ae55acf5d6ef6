"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

# Fields a caller may set on create or change through a partial update.
EDITABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "role",
        "business_name",
        "work_area",
        "skills",
        "background_text",
        "about_text",
        "summary",
        "avatar_url",
        "initials",
        "is_public",
    }
)

# Fields the AI generation step is allowed to overwrite.
GENERATED_FIELDS = frozenset({"about_text", "summary", "skills"})


def derive_initials(first_name: str, last_name: str) -> str:
    """Build the display fallback from the first letter of each name."""
    letters = [name.strip()[0] for name in (first_name, last_name) if name and name.strip()]
    return "".join(letters).upper()


@dataclass
class Profile:
    """Domain entity for a worker's public profile.

    One profile per user. ``id`` equals the owning user's id.
    """

    user_id: str
    first_name: str
    last_name: str
    role: str
    id: str = ""
    business_name: Optional[str] = None
    work_area: Optional[str] = None
    skills: list[str] = field(default_factory=list)
    background_text: Optional[str] = None
    about_text: Optional[str] = None
    summary: Optional[str] = None
    avatar_url: Optional[str] = None
    initials: str = ""
    is_public: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Key the profile on its owner and fill derived fields."""
        if not self.id:
            self.id = self.user_id
        if not self.initials:
            self.initials = derive_initials(self.first_name, self.last_name)
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def apply_changes(self, changes: dict[str, object]) -> None:
        """Merge supplied fields only and stamp ``updated_at``.

        Initials that were derived from the old name follow a rename unless
        the caller supplies new ones.
        """
        for name in changes:
            if name not in EDITABLE_FIELDS:
                raise ValueError(f"Field cannot be updated: {name}")

        derived = self.initials == derive_initials(self.first_name, self.last_name)
        for name, value in changes.items():
            setattr(self, name, value)

        renamed = "first_name" in changes or "last_name" in changes
        if renamed and derived and "initials" not in changes:
            self.initials = derive_initials(self.first_name, self.last_name)
        self.updated_at = datetime.utcnow()


@dataclass(frozen=True, slots=True)
class ProfileDraft:
    """Read-only input to AI text generation."""

    first_name: str
    last_name: str
    role: str
    business_name: Optional[str] = None
    work_area: Optional[str] = None
    skills: tuple[str, ...] = ()
    background_text: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileDraft":
        return cls(
            first_name=profile.first_name,
            last_name=profile.last_name,
            role=profile.role,
            business_name=profile.business_name or None,
            work_area=profile.work_area or None,
            skills=tuple(profile.skills),
            background_text=profile.background_text or None,
        )


@dataclass(frozen=True, slots=True)
class GeneratedProfile:
    """AI-written profile text."""

    about_text: str
    summary: str
    skills: list[str]
