"""
Generative output schemas.

Strict JSON contracts the model must satisfy. Decoding failures surface as
pydantic ValidationError and are mapped to GenerationError by the caller.

Dependencies: pydantic, cv_roast.models
System role: Schema-validated decoding of model output
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from cv_roast.models.critique import (
    RecommendationCategory,
    coerce_humiliation_score,
    coerce_quality_score,
)


class CritiquePayload(BaseModel):
    """Critique object returned by the model.

    All three keys are required. Scores that are present but non-numeric
    are replaced with defaults; numeric scores are clamped into range.
    """

    analysis_text: str = Field(min_length=1, description="Complete critique text")
    humiliation_score: int = Field(description="Humiliation level 0-100")
    quality_score: int = Field(description="Real quality rating 1-10")

    @field_validator("analysis_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("analysis_text is blank")
        return value

    @field_validator("humiliation_score", mode="before")
    @classmethod
    def _clamp_humiliation(cls, value: Any) -> int:
        return coerce_humiliation_score(value)

    @field_validator("quality_score", mode="before")
    @classmethod
    def _clamp_quality(cls, value: Any) -> int:
        return coerce_quality_score(value)


class RecommendationPayload(BaseModel):
    """Labeled recommendation lists returned by the deep-analysis prompt."""

    categories: list[RecommendationCategory] = Field(min_length=2)

    @field_validator("categories")
    @classmethod
    def _drop_blank_items(cls, value: list[RecommendationCategory]) -> list[RecommendationCategory]:
        cleaned = []
        for category in value:
            items = [item.strip() for item in category.items if item.strip()]
            if not items or not category.category.strip():
                raise ValueError(f"Category without content: {category.category!r}")
            cleaned.append(RecommendationCategory(category=category.category.strip(), items=items))
        return cleaned
