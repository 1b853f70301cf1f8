"""Critique generation: prompts, schemas, generators and fallback content."""

from cv_roast.core.critique.critique_generator import CritiqueGenerator
from cv_roast.core.critique.fallback_pool import FallbackPool
from cv_roast.core.critique.generation import GenerationOutcome
from cv_roast.core.critique.recommendation_generator import RecommendationGenerator

__all__ = [
    "CritiqueGenerator",
    "FallbackPool",
    "GenerationOutcome",
    "RecommendationGenerator",
]
