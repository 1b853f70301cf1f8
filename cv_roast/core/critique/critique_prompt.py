"""
Critique and recommendation prompts.

Instruction contracts for the two generative calls: the initial roast
(persona, analysis categories, strict JSON output) and the deep
recommendation set (four labeled lists). Supports the Langfuse registry.

Dependencies: langchain_core.prompts, cv_roast.observability.prompt_registry
System role: Prompt templates for critique generation
"""

import logging

from langchain_core.prompts import ChatPromptTemplate

from cv_roast.observability.prompt_registry import PromptRegistry

logger = logging.getLogger(__name__)

CRITIQUE_PROMPT_NAME = "document-critique"
RECOMMENDATION_PROMPT_NAME = "document-recommendations"

CRITIQUE_SYSTEM_PROMPT = """You are a brutally honest and darkly humorous critic of résumés and professional profiles. Roast the provided document with sarcasm and wit while secretly giving valuable feedback. Analyze specific details instead of making generic comments. Use emojis sparingly, only to punctuate the wittiest observations or the most important critique.

## Analysis areas
1. PROFESSIONAL EXPERIENCE (high priority)
   - Companies listed: impressive, relevant, suspicious gaps?
   - Job titles: inflated or undersold?
   - Responsibilities versus achievements, metrics or the lack of them
   - Career progression or stagnation, job-hopping, employment gaps
2. SKILLS ASSESSMENT (high priority)
   - Claimed technical and soft skills versus evidence in the experience
   - Outdated, irrelevant, exaggerated or generic skills
   - Depth versus breadth, missing skills for the target role
3. EDUCATION DEEP DIVE (high priority)
   - Relevance of degrees, institution, missing certifications
   - How education supports the career narrative
4. Additional areas: formatting, overall narrative, personal branding, tone

## Structure (300-400 words)
- A sarcastic introduction of 2-3 sentences
- PROFESSIONAL EXPERIENCE: roast of the specific companies, roles and descriptions
- SKILLS ASSESSMENT: critique of the specific skills claimed
- EDUCATION DEEP DIVE: analysis of the specific degrees and institutions
- EPIC FAILURES: 4-6 specific examples of the worst elements
- SAVAGE ADVICE: 2-3 concrete improvement suggestions disguised as insults

## Output format
Respond ONLY with a single JSON object, without markdown or code fences, with exactly these keys:
- "analysis_text": the complete analysis with all sections above
- "humiliation_score": integer from 0 (mild) to 100 (total destruction)
- "quality_score": integer from 1 (complete disaster) to 10 (perfection) rating the real quality of the document

Return nothing except the JSON object."""

RECOMMENDATION_SYSTEM_PROMPT = """You are a professional career consultant and résumé expert. Analyze the provided document and build a personalized improvement plan with exactly these 4 categories:
1. Content Improvements: specific ways to improve the current content
2. Format & Structure: how to better organize and present the information
3. Skills Enhancement: which skills to develop given the current profile
4. Career Development Plan: a roadmap for professional growth

Give 5 specific, actionable items per category, personalized to the person's experience level, industry and current skills.

## Output format
Respond ONLY with a single JSON object, without markdown or code fences, with one key "categories" holding a list of objects. Each object has the keys "category" (the category name) and "items" (a list of strings)."""

CRITIQUE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", CRITIQUE_SYSTEM_PROMPT),
    ("human", "Here is the document text to analyze:\n{document_text}"),
])

RECOMMENDATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", RECOMMENDATION_SYSTEM_PROMPT),
    ("human", "Analyze this document and provide personalized improvement recommendations and a career development roadmap:\n\n{document_text}"),
])

LOCAL_PROMPTS = {
    CRITIQUE_PROMPT_NAME: CRITIQUE_PROMPT,
    RECOMMENDATION_PROMPT_NAME: RECOMMENDATION_PROMPT,
}


def register_prompts(
    critique_model: str,
    recommendation_model: str,
    labels: list[str] | None = None,
) -> None:
    """
    Publish both local templates to Langfuse.

    Args:
        critique_model: Model identifier stored with the critique prompt
        recommendation_model: Model identifier stored with the recommendation prompt
        labels: Optional labels (e.g., ["production", "staging"])
    """
    registry = PromptRegistry()
    if not registry.is_enabled:
        logger.debug("Prompt registry disabled, skipping registration")
        return

    registry.register_prompt(
        name=CRITIQUE_PROMPT_NAME,
        template=CRITIQUE_PROMPT,
        model=critique_model,
        labels=labels or ["development"],
    )
    registry.register_prompt(
        name=RECOMMENDATION_PROMPT_NAME,
        template=RECOMMENDATION_PROMPT,
        model=recommendation_model,
        labels=labels or ["development"],
    )


def get_prompt(
    name: str,
    use_registry: bool = False,
    label: str | None = None,
) -> ChatPromptTemplate:
    """
    Get a prompt template by name.

    Args:
        name: CRITIQUE_PROMPT_NAME or RECOMMENDATION_PROMPT_NAME
        use_registry: Whether to try the Langfuse registry first
        label: Optional label filter when using registry

    Returns:
        ChatPromptTemplate: Registry version if available, else the local template

    Raises:
        KeyError: If name is not a known prompt
    """
    local = LOCAL_PROMPTS[name]
    if use_registry:
        registry = PromptRegistry()
        if registry.is_enabled:
            prompt = registry.get_chat_prompt(name, label=label)
            if prompt is not None:
                logger.debug("Using prompt from registry: name=%s", name)
                return prompt
            logger.debug("Prompt not found in registry, using local template")
    return local
