"""
Observability module.

Provides structured logging, correlation ID tracking and Langfuse prompt
version management.
"""

from cv_roast.observability.prompt_registry import PromptRegistry

__all__ = ["PromptRegistry"]
