"""Profile text generator protocol."""

from typing import Protocol

from domain.entities.profile import GeneratedProfile, ProfileDraft
from domain.entities.settings import ProfileStyle


class IProfileGenerator(Protocol):
    """Protocol for services that write profile text."""

    async def generate(self, draft: ProfileDraft, style: ProfileStyle) -> GeneratedProfile:
        """
        Write about text, a one-line summary and a skill list.

        Raises:
            ProfileGenerationError: If the upstream call fails or its answer
                cannot be parsed. No partial result is returned.
        """
        ...
