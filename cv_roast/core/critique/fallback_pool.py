"""
Precomputed critiques and recommendation sets.

Served whenever a generative call fails so that every request still gets a
structurally valid response, even under a total model outage.

Dependencies: random, cv_roast.models
System role: Fallback content for the critique pipeline
"""

import random

from cv_roast.core.critique.critique_schema import CritiquePayload
from cv_roast.models.critique import CritiqueResult, GeneratedBy, RecommendationCategory

FALLBACK_CRITIQUES: tuple[CritiquePayload, ...] = (
    CritiquePayload(
        analysis_text=(
            'Oh boy, another "detail-oriented" professional who can\'t even align their '
            "margins properly! Six glorious years of experience that read like a collection "
            'of "I showed up to work" achievements. And that objective statement? '
            '"Looking to leverage my skills in a dynamic environment" is a very long way '
            'of saying "please pay me". 😂\n\n'
            "### EPIC FAILURES\n"
            '• "Proficient in Microsoft Office" is as impressive as operating a light switch\n'
            '• Those online course certificates might as well be "I watched videos" badges\n'
            '• "Team player" and "works well independently" in the same paragraph. Pick a lane!\n\n'
            "### SAVAGE ADVICE\n"
            'Add actual accomplishments instead of listing "attended meetings" as a key '
            "responsibility. Just a thought! 🤷"
        ),
        humiliation_score=85,
        quality_score=3,
    ),
    CritiquePayload(
        analysis_text=(
            "Ah, another masterpiece of mediocrity! This reads like a professional profile "
            'having an identity crisis. Organizing the office birthday party does not count '
            'as "leadership skills".\n\n'
            "### EPIC FAILURES\n"
            '• The "extensive experience" section can be summarized as "I have had jobs"\n'
            "• Five out of five stars in every skill? Even Superman has weaknesses\n"
            '• "Proficient in multiple programming languages" means Hello World in three IDEs\n\n'
            "### SAVAGE ADVICE\n"
            'Add real metrics instead of buzzwords. "Increased efficiency" without numbers is '
            'like saying "I\'m tall" while sitting down! 😅'
        ),
        humiliation_score=92,
        quality_score=2,
    ),
    CritiquePayload(
        analysis_text=(
            '*Adjusts glasses* Another "results-driven professional" who forgot to include '
            "any actual results! This document is a movie trailer that only shows the boring "
            "parts.\n\n"
            "### EPIC FAILURES\n"
            "• Job titles more inflated than cryptocurrency prices\n"
            '• "Expert in industry best practices" translates to "I read a blog post once"\n'
            "• The font choice is more offensive than pineapple on pizza\n\n"
            "### SAVAGE ADVICE\n"
            '"Responsible for" is code for "I was in the room while things happened". '
            "Show what you actually DID! 🚀"
        ),
        humiliation_score=95,
        quality_score=1,
    ),
)

GENERIC_RECOMMENDATIONS: tuple[RecommendationCategory, ...] = (
    RecommendationCategory(
        category="Content Improvements",
        items=[
            "Start bullet points with action verbs such as 'Developed', 'Implemented' or 'Led'",
            "Quantify achievements with specific numbers and percentages",
            "Remove outdated or irrelevant experience",
            "Focus on achievements rather than job duties",
            "Customize the document for each application",
        ],
    ),
    RecommendationCategory(
        category="Format & Structure",
        items=[
            "Keep the document to 1-2 pages",
            "Use consistent formatting throughout",
            "Leave adequate white space for readability",
            "Choose a professional, readable font such as Arial or Calibri",
            "Use bullet points instead of paragraphs for experience",
        ],
    ),
    RecommendationCategory(
        category="Skills Enhancement",
        items=[
            "Include both hard and soft skills",
            "Remove basic skills everyone is assumed to have",
            "Add relevant technical skills and certifications",
            "Match skills to the requirements of the target role",
            "State proficiency levels for languages and technical skills",
        ],
    ),
    RecommendationCategory(
        category="Career Development Plan",
        items=[
            "Identify the key skill gaps in your current profile",
            "Research industry certifications that would raise your value",
            "Join professional associations in your field",
            "Build a portfolio of projects that showcases your skills",
            "Network with professionals already in your target role",
        ],
    ),
)


class FallbackPool:
    """Uniformly random draws from the precomputed critique catalog."""

    def __init__(
        self,
        critiques: tuple[CritiquePayload, ...] = FALLBACK_CRITIQUES,
        recommendations: tuple[RecommendationCategory, ...] = GENERIC_RECOMMENDATIONS,
        rng: random.Random | None = None,
    ) -> None:
        if not critiques:
            raise ValueError("Fallback pool needs at least one critique")
        if not recommendations:
            raise ValueError("Fallback pool needs at least one recommendation category")
        self._critiques = critiques
        self._recommendations = recommendations
        self._rng = rng or random.Random()

    def draw(self, session_id: str) -> CritiqueResult:
        """
        Pick a canned critique for a session.

        Args:
            session_id: Session the critique is attached to

        Returns:
            CritiqueResult: Entry tagged generated_by=fallback
        """
        entry = self._rng.choice(self._critiques)
        return CritiqueResult(
            session_id=session_id,
            analysis_text=entry.analysis_text,
            humiliation_score=entry.humiliation_score,
            quality_score=entry.quality_score,
            generated_by=GeneratedBy.FALLBACK,
        )

    def generic_recommendations(self) -> list[RecommendationCategory]:
        """Non-personalized recommendation set (copies, safe to mutate)."""
        return [category.model_copy(deep=True) for category in self._recommendations]
