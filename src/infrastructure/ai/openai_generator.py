"""OpenAI-backed profile text generator."""

import json
from typing import Optional

import openai
import structlog
from openai import AsyncOpenAI
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import settings
from core.exceptions import ProfileGenerationError
from domain.entities.profile import GeneratedProfile, ProfileDraft
from domain.entities.settings import ProfileStyle

logger = structlog.get_logger()

STYLE_DIRECTIVES = {
    ProfileStyle.SIMPLE: "Write a short, clear and professional text.",
    ProfileStyle.DETAILED: (
        "Write a detailed and comprehensive text with plenty of specifics "
        "about the worker's experience and expertise."
    ),
}


class _GeneratedPayload(BaseModel):
    """Shape the model is asked to return."""

    model_config = ConfigDict(extra="ignore")

    about_text: str = Field(..., alias="aboutText", min_length=1)
    summary: str
    skills: list[str]


def build_prompt(draft: ProfileDraft, style: ProfileStyle, language: str) -> str:
    """Render the single user prompt for a profile draft."""
    lines = [
        f"You are a professional copywriter. Write a professional work profile in {language} for:",
        "",
        f"Name: {draft.first_name} {draft.last_name}",
        f"Line of work: {draft.role}",
    ]
    if draft.business_name:
        lines.append(f"Business name: {draft.business_name}")
    if draft.work_area:
        lines.append(f"Work area: {draft.work_area}")
    lines.append(f"Existing skills: {', '.join(draft.skills) if draft.skills else 'none listed'}")
    if draft.background_text:
        lines.append(f"Additional background: {draft.background_text}")

    lines += [
        "",
        STYLE_DIRECTIVES[style],
        "",
        "Return the answer as a JSON object with exactly these fields:",
        "{",
        '  "aboutText": "a professional paragraph about the worker (3-4 sentences)",',
        '  "summary": "a one-line description",',
        '  "skills": ["an array of 4-6 professional skills or services"]',
        "}",
        "",
        f"Important: write in {language} only, in the first person, "
        "in a professional and friendly tone.",
    ]
    return "\n".join(lines)


class OpenAIProfileGenerator:
    """Generates profile text with a single JSON-mode chat completion."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str = settings.openai_model,
        max_tokens: int = settings.openai_max_tokens,
        language: str = settings.profile_language,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._language = language

    async def generate(self, draft: ProfileDraft, style: ProfileStyle) -> GeneratedProfile:
        """Call the model once and parse its JSON answer. All or nothing."""
        if self._client is None:
            raise ProfileGenerationError("AI generation is not configured")

        prompt = build_prompt(draft, style, self._language)
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                max_completion_tokens=self._max_tokens,
            )
        except openai.OpenAIError as e:
            logger.error("profile_generation_call_failed", error=str(e), error_type=type(e).__name__)
            raise ProfileGenerationError("Language model call failed") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error("profile_generation_empty_response", model=self._model)
            raise ProfileGenerationError("No response from AI")

        return self._parse(content)

    def _parse(self, content: str) -> GeneratedProfile:
        try:
            payload = _GeneratedPayload.model_validate(json.loads(content))
        except (ValueError, ValidationError) as e:
            logger.error("profile_generation_unparseable", error=str(e))
            raise ProfileGenerationError("AI response was not valid profile JSON") from e

        return GeneratedProfile(
            about_text=payload.about_text,
            summary=payload.summary,
            skills=payload.skills,
        )


def create_openai_client() -> Optional[AsyncOpenAI]:
    """Build the shared client, or None when no API key is configured."""
    if not settings.openai_api_key:
        logger.warning("openai_not_configured")
        return None
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout_seconds,
        max_retries=0,
    )
