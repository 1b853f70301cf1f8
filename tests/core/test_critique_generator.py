"""
Test suite for CritiqueGenerator.

Exercises the single-attempt contract: one model call under a timeout,
schema-validated decoding, and a GenerationError outcome for every failure.
"""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from cv_roast.configs.generation import GenerationSettings
from cv_roast.core.critique.critique_generator import CritiqueGenerator
from cv_roast.core.critique.critique_prompt import CRITIQUE_PROMPT
from cv_roast.core.critique.generation import message_text, strip_code_fence
from cv_roast.core.exceptions import GenerationError
from cv_roast.models.critique import GeneratedBy
from tests.helpers import critique_generator, critique_json, failing_model, fake_model


class TestCritiqueGeneratorSuccess:
    """Tests for successful generation."""

    @pytest.mark.asyncio
    async def test_returns_model_result_for_session(self) -> None:
        generator = critique_generator(fake_model(critique_json(humiliation_score=80, quality_score=4)))

        outcome = await generator.generate("Jane Doe, Senior Engineer", "session-1")

        assert outcome.succeeded
        assert outcome.error is None
        result = outcome.value
        assert result.session_id == "session-1"
        assert result.generated_by is GeneratedBy.MODEL
        assert result.humiliation_score == 80
        assert result.quality_score == 4

    @pytest.mark.asyncio
    async def test_analysis_text_is_formatted(self) -> None:
        reply = critique_json(analysis_text="Intro.\n\n\n\n**EPIC FAILURES:** Comic Sans.")
        generator = critique_generator(fake_model(reply))

        outcome = await generator.generate("text", "session-1")

        assert outcome.value.analysis_text == "Intro.\n\n### EPIC FAILURES\nComic Sans."

    @pytest.mark.asyncio
    async def test_out_of_range_scores_clamped(self) -> None:
        generator = critique_generator(fake_model(critique_json("X", humiliation_score=150, quality_score=-1)))

        outcome = await generator.generate("text", "session-1")

        assert outcome.succeeded
        assert outcome.value.humiliation_score == 100
        assert outcome.value.quality_score == 1

    @pytest.mark.asyncio
    async def test_non_numeric_scores_defaulted(self) -> None:
        generator = critique_generator(fake_model(critique_json("X", humiliation_score="very", quality_score="meh")))

        outcome = await generator.generate("text", "session-1")

        assert outcome.value.humiliation_score == 75
        assert outcome.value.quality_score == 5

    @pytest.mark.asyncio
    async def test_code_fenced_json_accepted(self) -> None:
        reply = f"```json\n{critique_json('Fenced.')}\n```"
        generator = critique_generator(fake_model(reply))

        outcome = await generator.generate("text", "session-1")

        assert outcome.succeeded
        assert outcome.value.analysis_text == "Fenced."

    @pytest.mark.asyncio
    async def test_document_text_reaches_the_prompt(self) -> None:
        model = MagicMock()
        model.ainvoke = MagicMock(side_effect=fake_model(critique_json()).ainvoke)
        generator = critique_generator(model)

        await generator.generate("UNIQUE-DOCUMENT-MARKER", "session-1")

        messages = model.ainvoke.call_args.args[0]
        assert model.ainvoke.call_count == 1
        assert "UNIQUE-DOCUMENT-MARKER" in messages[-1].content


class TestCritiqueGeneratorFailures:
    """Every failure becomes a GenerationError outcome."""

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        async def never_answers(*args, **kwargs):
            await asyncio.sleep(5)

        model = MagicMock()
        model.ainvoke = never_answers
        generator = critique_generator(model, timeout_seconds=0.05)

        outcome = await generator.generate("text", "session-1")

        assert not outcome.succeeded
        assert outcome.value is None
        assert outcome.error.reason == GenerationError.TIMEOUT

    @pytest.mark.asyncio
    async def test_upstream_error_is_not_leaked(self) -> None:
        generator = critique_generator(failing_model(RuntimeError("429 quota exceeded for key AIza-secret")))

        outcome = await generator.generate("text", "session-1")

        assert outcome.error.reason == GenerationError.UPSTREAM_ERROR
        assert outcome.error.details["error_type"] == "RuntimeError"
        assert "AIza-secret" not in str(outcome.error)

    @pytest.mark.asyncio
    async def test_model_called_exactly_once_on_failure(self) -> None:
        model = failing_model(ConnectionError("reset"))
        generator = critique_generator(model)

        await generator.generate("text", "session-1")

        assert model.ainvoke.await_count == 1

    @pytest.mark.asyncio
    async def test_non_json_reply(self) -> None:
        generator = critique_generator(fake_model("Here is your roast, enjoy!"))

        outcome = await generator.generate("text", "session-1")

        assert outcome.error.reason == GenerationError.MALFORMED_OUTPUT

    @pytest.mark.asyncio
    async def test_missing_field(self) -> None:
        generator = critique_generator(fake_model('{"analysis_text": "X", "humiliation_score": 50}'))

        outcome = await generator.generate("text", "session-1")

        assert outcome.error.reason == GenerationError.MALFORMED_OUTPUT

    @pytest.mark.asyncio
    async def test_empty_reply(self) -> None:
        generator = critique_generator(fake_model("   "))

        outcome = await generator.generate("text", "session-1")

        assert outcome.error.reason == GenerationError.EMPTY_RESPONSE

    @pytest.mark.asyncio
    async def test_text_empty_after_formatting(self) -> None:
        generator = critique_generator(fake_model(critique_json(analysis_text="****")))

        outcome = await generator.generate("text", "session-1")

        assert outcome.error.reason == GenerationError.MALFORMED_OUTPUT

    @pytest.mark.asyncio
    async def test_model_construction_failure(self) -> None:
        def broken_factory():
            raise ValueError("GOOGLE_API_KEY not set")

        generator = CritiqueGenerator(prompt=CRITIQUE_PROMPT, model_factory=broken_factory)

        outcome = await generator.generate("text", "session-1")

        assert outcome.error.reason == GenerationError.UPSTREAM_ERROR


class TestCritiqueGeneratorConstruction:
    """Tests for wiring from settings."""

    def test_requires_model_or_factory(self) -> None:
        with pytest.raises(ValueError):
            CritiqueGenerator(prompt=CRITIQUE_PROMPT)

    def test_from_settings_builds_model_lazily(self) -> None:
        settings = GenerationSettings(critique_model="gemini-test", timeout_seconds=12.0)

        with patch("cv_roast.core.critique.critique_generator.build_gemini_model") as build:
            generator = CritiqueGenerator.from_settings(settings)
            build.assert_not_called()

            generator._get_model()
            generator._get_model()

        build.assert_called_once()
        kwargs = build.call_args.kwargs
        assert kwargs["model_id"] == "gemini-test"
        assert kwargs["timeout_seconds"] == 12.0
        assert kwargs["temperature"] == settings.critique_temperature

    def test_from_settings_uses_local_prompt_by_default(self) -> None:
        generator = CritiqueGenerator.from_settings(GenerationSettings(), model=fake_model())

        assert generator._prompt is CRITIQUE_PROMPT


class TestReplyHelpers:
    """Tests for reply text helpers."""

    def test_message_text_joins_text_parts(self) -> None:
        content = ["{\"a\": ", {"type": "text", "text": "1}"}, {"type": "image_url", "image_url": "x"}]

        assert message_text(content) == "{\"a\": 1}"

    def test_message_text_unknown_content(self) -> None:
        assert message_text(None) == ""

    @pytest.mark.parametrize(
        "raw",
        ['```json\n{"a": 1}\n```', '```\n{"a": 1}\n```', '  {"a": 1}  ', '```JSON{"a": 1}```'],
    )
    def test_strip_code_fence(self, raw) -> None:
        assert strip_code_fence(raw) == '{"a": 1}'
