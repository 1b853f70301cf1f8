"""
Recommendation generator for the deep analysis.

Second, differently-prompted call against the same source text producing
labeled recommendation lists. Same single-attempt contract as the critique.

Dependencies: langchain_core, cv_roast.core.critique
System role: Generative step of the deep-analysis operation
"""

from langchain_core.language_models.chat_models import BaseChatModel

from cv_roast.configs.generation import GenerationSettings
from cv_roast.core.critique.critique_prompt import RECOMMENDATION_PROMPT_NAME, get_prompt
from cv_roast.core.critique.critique_schema import RecommendationPayload
from cv_roast.core.critique.generation import (
    GenerationOutcome,
    StructuredGenerator,
    build_gemini_model,
)
from cv_roast.models.critique import RecommendationCategory


class RecommendationGenerator(StructuredGenerator[RecommendationPayload]):
    """Generates personalized recommendation categories."""

    schema = RecommendationPayload
    operation = "generate_recommendations"

    @classmethod
    def from_settings(
        cls,
        settings: GenerationSettings,
        model: BaseChatModel | None = None,
    ) -> "RecommendationGenerator":
        """Build a generator from generation settings (Gemini client created lazily)."""
        return cls(
            prompt=get_prompt(
                RECOMMENDATION_PROMPT_NAME,
                use_registry=settings.use_prompt_registry,
                label=settings.prompt_label,
            ),
            model=model,
            model_factory=lambda: build_gemini_model(
                model_id=settings.recommendation_model,
                temperature=settings.recommendation_temperature,
                max_output_tokens=settings.max_output_tokens,
                timeout_seconds=settings.timeout_seconds,
                google_api_key=settings.google_api_key,
            ),
            timeout_seconds=settings.timeout_seconds,
        )

    async def generate(self, document_text: str) -> GenerationOutcome[list[RecommendationCategory]]:
        """
        Produce recommendation categories in exactly one model call.

        Args:
            document_text: Extracted document text

        Returns:
            GenerationOutcome[list[RecommendationCategory]]: Categories or failure
        """
        outcome = await self._call(document_text)
        if not outcome.succeeded:
            return GenerationOutcome.failure(outcome.error)
        return GenerationOutcome.success(outcome.value.categories)
