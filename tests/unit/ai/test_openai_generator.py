"""Unit tests for the OpenAI profile generator."""

import json
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import openai
import pytest

from core.exceptions import ErrorCode, ProfileGenerationError
from domain.entities.profile import ProfileDraft
from domain.entities.settings import ProfileStyle
from infrastructure.ai.openai_generator import (
    STYLE_DIRECTIVES,
    OpenAIProfileGenerator,
    build_prompt,
)


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(response: Any = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
    return client


@pytest.fixture
def draft() -> ProfileDraft:
    return ProfileDraft(
        first_name="Sara",
        last_name="Cohen",
        role="Electrician",
        business_name="Cohen Electric",
        work_area="Tel Aviv",
        skills=("Wiring", "Lighting"),
        background_text="Twelve years in residential work",
    )


@pytest.fixture
def bare_draft() -> ProfileDraft:
    return ProfileDraft(first_name="Marcus", last_name="Johnson", role="Plumber")


GOOD_ANSWER = json.dumps(
    {
        "aboutText": "I am a licensed electrician serving Tel Aviv.",
        "summary": "Licensed electrician",
        "skills": ["Wiring", "Lighting", "Panels", "Inspections"],
    }
)


class TestBuildPrompt:
    def test_includes_all_supplied_fields(self, draft: ProfileDraft) -> None:
        prompt = build_prompt(draft, ProfileStyle.SIMPLE, "Hebrew")

        assert "Sara Cohen" in prompt
        assert "Electrician" in prompt
        assert "Cohen Electric" in prompt
        assert "Tel Aviv" in prompt
        assert "Wiring, Lighting" in prompt
        assert "Twelve years in residential work" in prompt
        assert "Hebrew" in prompt
        assert STYLE_DIRECTIVES[ProfileStyle.SIMPLE] in prompt

    def test_omits_missing_optionals(self, bare_draft: ProfileDraft) -> None:
        prompt = build_prompt(bare_draft, ProfileStyle.DETAILED, "English")

        assert "Business name" not in prompt
        assert "Work area" not in prompt
        assert "Additional background" not in prompt
        assert "none listed" in prompt
        assert STYLE_DIRECTIVES[ProfileStyle.DETAILED] in prompt

    def test_asks_for_json_fields(self, draft: ProfileDraft) -> None:
        prompt = build_prompt(draft, ProfileStyle.SIMPLE, "Hebrew")

        for field in ('"aboutText"', '"summary"', '"skills"'):
            assert field in prompt


class TestGenerate:
    @pytest.mark.asyncio
    async def test_parses_json_answer(self, draft: ProfileDraft) -> None:
        client = _client(_completion(GOOD_ANSWER))
        generator = OpenAIProfileGenerator(client, model="gpt-test", max_tokens=256)

        result = await generator.generate(draft, ProfileStyle.SIMPLE)

        assert result.about_text == "I am a licensed electrician serving Tel Aviv."
        assert result.summary == "Licensed electrician"
        assert result.skills == ["Wiring", "Lighting", "Panels", "Inspections"]

        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["max_completion_tokens"] == 256
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0]["role"] == "user"
        assert "Sara Cohen" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_empty_optional_inputs_still_generate(self, bare_draft: ProfileDraft) -> None:
        generator = OpenAIProfileGenerator(_client(_completion(GOOD_ANSWER)))

        result = await generator.generate(bare_draft, ProfileStyle.DETAILED)

        assert result.about_text
        assert all(isinstance(s, str) for s in result.skills)

    @pytest.mark.asyncio
    async def test_does_not_enforce_skill_count(self, draft: ProfileDraft) -> None:
        answer = json.dumps({"aboutText": "Hi.", "summary": "", "skills": ["One"]})
        generator = OpenAIProfileGenerator(_client(_completion(answer)))

        result = await generator.generate(draft, ProfileStyle.SIMPLE)

        assert result.skills == ["One"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            None,
            "",
            "not json at all",
            json.dumps({"summary": "x", "skills": []}),
            json.dumps({"aboutText": "", "summary": "x", "skills": []}),
            json.dumps({"aboutText": "Hi", "summary": "x", "skills": "Wiring"}),
            json.dumps(["aboutText"]),
        ],
    )
    async def test_unusable_answers_fail(self, draft: ProfileDraft, content: str | None) -> None:
        generator = OpenAIProfileGenerator(_client(_completion(content)))

        with pytest.raises(ProfileGenerationError) as exc_info:
            await generator.generate(draft, ProfileStyle.SIMPLE)

        assert exc_info.value.error_code == ErrorCode.AI_GENERATION_FAILED
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_no_choices_fails(self, draft: ProfileDraft) -> None:
        generator = OpenAIProfileGenerator(_client(SimpleNamespace(choices=[])))

        with pytest.raises(ProfileGenerationError):
            await generator.generate(draft, ProfileStyle.SIMPLE)

    @pytest.mark.asyncio
    async def test_sdk_errors_become_generation_errors(self, draft: ProfileDraft) -> None:
        client = _client(error=openai.OpenAIError("upstream unavailable"))
        generator = OpenAIProfileGenerator(client)

        with pytest.raises(ProfileGenerationError):
            await generator.generate(draft, ProfileStyle.SIMPLE)

        assert client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_unconfigured_client_fails(self, draft: ProfileDraft) -> None:
        generator = OpenAIProfileGenerator(None)

        with pytest.raises(ProfileGenerationError) as exc_info:
            await generator.generate(draft, ProfileStyle.SIMPLE)

        assert exc_info.value.details == {"reason": "AI generation is not configured"}
