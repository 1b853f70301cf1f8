"""Domain models and API contracts."""

from cv_roast.models.critique import (
    AnalyzeResponse,
    CritiqueResult,
    DeepAnalysisResponse,
    DeepAnalysisResult,
    GeneratedBy,
    RecommendationCategory,
)
from cv_roast.models.session import DocumentRecord, Session, SessionMapping

__all__ = [
    "AnalyzeResponse",
    "CritiqueResult",
    "DeepAnalysisResponse",
    "DeepAnalysisResult",
    "DocumentRecord",
    "GeneratedBy",
    "RecommendationCategory",
    "Session",
    "SessionMapping",
]
