"""
Critique generator.

Asks the model for a roast of the document under the strict critique
contract, then clamps the scores and normalizes the analysis text.

Dependencies: langchain_core, cv_roast.core.critique
System role: Primary generative step of the analyze operation
"""

from langchain_core.language_models.chat_models import BaseChatModel

from cv_roast.configs.generation import GenerationSettings
from cv_roast.core.critique.analysis_formatter import format_analysis_text
from cv_roast.core.critique.critique_prompt import CRITIQUE_PROMPT_NAME, get_prompt
from cv_roast.core.critique.critique_schema import CritiquePayload
from cv_roast.core.critique.generation import (
    GenerationOutcome,
    StructuredGenerator,
    build_gemini_model,
)
from cv_roast.core.exceptions import GenerationError
from cv_roast.models.critique import CritiqueResult, GeneratedBy


class CritiqueGenerator(StructuredGenerator[CritiquePayload]):
    """Generates the initial critique of an uploaded document."""

    schema = CritiquePayload
    operation = "generate_critique"

    @classmethod
    def from_settings(
        cls,
        settings: GenerationSettings,
        model: BaseChatModel | None = None,
    ) -> "CritiqueGenerator":
        """
        Build a generator from generation settings.

        Args:
            settings: Generation settings
            model: Optional pre-built chat model (tests, custom providers)

        Returns:
            CritiqueGenerator: Configured generator; the Gemini client is
                created lazily on first use
        """
        return cls(
            prompt=get_prompt(
                CRITIQUE_PROMPT_NAME,
                use_registry=settings.use_prompt_registry,
                label=settings.prompt_label,
            ),
            model=model,
            model_factory=lambda: build_gemini_model(
                model_id=settings.critique_model,
                temperature=settings.critique_temperature,
                max_output_tokens=settings.max_output_tokens,
                timeout_seconds=settings.timeout_seconds,
                google_api_key=settings.google_api_key,
            ),
            timeout_seconds=settings.timeout_seconds,
        )

    async def generate(self, document_text: str, session_id: str) -> GenerationOutcome[CritiqueResult]:
        """
        Critique a document in exactly one model call.

        Args:
            document_text: Extracted document text
            session_id: Session the critique belongs to

        Returns:
            GenerationOutcome[CritiqueResult]: Result tagged generated_by=model,
                or the GenerationError describing why generation failed
        """
        outcome = await self._call(document_text)
        if not outcome.succeeded:
            return GenerationOutcome.failure(outcome.error)

        payload = outcome.value
        analysis_text = format_analysis_text(payload.analysis_text)
        if not analysis_text:
            return self._fail(
                GenerationError("Analysis text empty after formatting", GenerationError.MALFORMED_OUTPUT)
            )

        return GenerationOutcome.success(
            CritiqueResult(
                session_id=session_id,
                analysis_text=analysis_text,
                humiliation_score=payload.humiliation_score,
                quality_score=payload.quality_score,
                generated_by=GeneratedBy.MODEL,
            )
        )
