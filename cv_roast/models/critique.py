"""
Critique domain models and API schemas.

Critique results with clamped scores, deep-analysis recommendation sets,
and the request/response contracts of the HTTP endpoints.

Dependencies: pydantic
System role: Critique API contracts
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

HUMILIATION_SCORE_RANGE = (0, 100)
QUALITY_SCORE_RANGE = (1, 10)
DEFAULT_HUMILIATION_SCORE = 75
DEFAULT_QUALITY_SCORE = 5


class GeneratedBy(str, Enum):
    """Origin of a critique or recommendation set."""

    MODEL = "model"
    FALLBACK = "fallback"


def coerce_score(value: Any, bounds: tuple[int, int], default: int) -> int:
    """
    Clamp a score into bounds, replacing non-numeric values with a default.

    Booleans, strings, None and NaN count as non-numeric. Out-of-range
    numbers are clamped, never rejected.

    Args:
        value: Raw score value
        bounds: Inclusive (low, high) range
        default: Replacement for non-numeric values

    Returns:
        int: Score within bounds
    """
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    return int(round(min(high, max(low, value))))


def coerce_humiliation_score(value: Any) -> int:
    """Clamp into 0..100, default 75."""
    return coerce_score(value, HUMILIATION_SCORE_RANGE, DEFAULT_HUMILIATION_SCORE)


def coerce_quality_score(value: Any) -> int:
    """Clamp into 1..10, default 5."""
    return coerce_score(value, QUALITY_SCORE_RANGE, DEFAULT_QUALITY_SCORE)


class CritiqueResult(BaseModel):
    """Critique of one session's document."""

    session_id: str
    analysis_text: str = Field(min_length=1)
    humiliation_score: int = Field(description="Humiliation level, 0 (mild) to 100")
    quality_score: int = Field(description="Actual document quality, 1 to 10")
    generated_by: GeneratedBy

    @field_validator("humiliation_score", mode="before")
    @classmethod
    def _clamp_humiliation(cls, value: Any) -> int:
        return coerce_humiliation_score(value)

    @field_validator("quality_score", mode="before")
    @classmethod
    def _clamp_quality(cls, value: Any) -> int:
        return coerce_quality_score(value)


class RecommendationCategory(BaseModel):
    """One labeled list of recommendations."""

    category: str = Field(min_length=1)
    items: list[str] = Field(min_length=1)


class DeepAnalysisResult(BaseModel):
    """Recommendation set produced by the deep analysis."""

    categories: list[RecommendationCategory]
    source: GeneratedBy


class AnalyzeResponse(BaseModel):
    """Response schema for POST /analyze."""

    analysis_text: str
    humiliation_score: int
    quality_score: int
    generated_by: GeneratedBy
    session_id: str

    @classmethod
    def from_result(cls, result: CritiqueResult) -> "AnalyzeResponse":
        return cls(
            analysis_text=result.analysis_text,
            humiliation_score=result.humiliation_score,
            quality_score=result.quality_score,
            generated_by=result.generated_by,
            session_id=result.session_id,
        )


class DeepAnalysisResponse(DeepAnalysisResult):
    """Response schema for GET /deep-analysis/{identifier}."""
