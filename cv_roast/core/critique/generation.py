"""
Single-attempt structured generation.

Calls a chat model once under a hard timeout and decodes its reply against
a pydantic schema. Every failure (timeout, quota, transport, empty or
malformed output) becomes a GenerationError carried in a GenerationOutcome;
nothing is raised to the caller and the transport error never leaks.

Dependencies: asyncio, pydantic, langchain_core, langchain_google_genai
System role: Generative-call boundary for the critique pipeline
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, ValidationError

from cv_roast.core.exceptions import GenerationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
SchemaT = TypeVar("SchemaT", bound=BaseModel)

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(?P<body>.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class GenerationOutcome(Generic[T]):
    """Result of one generation attempt: a value or a typed error."""

    value: T | None = None
    error: GenerationError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.value is not None

    @classmethod
    def success(cls, value: T) -> "GenerationOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GenerationError) -> "GenerationOutcome[T]":
        return cls(error=error)


def build_gemini_model(
    model_id: str,
    temperature: float,
    max_output_tokens: int,
    timeout_seconds: float,
    google_api_key: str | None = None,
) -> BaseChatModel:
    """
    Build a Gemini chat model configured for exactly one attempt.

    Args:
        model_id: Gemini model identifier
        temperature: Sampling temperature
        max_output_tokens: Output token cap
        timeout_seconds: Client-side request timeout
        google_api_key: API key (GOOGLE_API_KEY env var when None)

    Returns:
        BaseChatModel: ChatGoogleGenerativeAI instance
    """
    from langchain_google_genai import ChatGoogleGenerativeAI

    kwargs: dict[str, Any] = {
        "model": model_id,
        "temperature": temperature,
        "max_output_tokens": max_output_tokens,
        "timeout": timeout_seconds,
        "max_retries": 0,
        "response_mime_type": "application/json",
    }
    if google_api_key:
        kwargs["google_api_key"] = google_api_key
    return ChatGoogleGenerativeAI(**kwargs)


def message_text(content: Any) -> str:
    """Flatten an AIMessage content (str or list of parts) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return ""


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json fence if the model added one anyway."""
    match = _CODE_FENCE.match(text)
    return match.group("body") if match else text.strip()


class StructuredGenerator(Generic[SchemaT]):
    """
    One model call, decoded into a pydantic schema.

    Subclasses set the schema and prompt name and turn the decoded payload
    into their domain result.
    """

    schema: type[SchemaT]
    operation: str = "generate"

    def __init__(
        self,
        prompt: ChatPromptTemplate,
        model: BaseChatModel | None = None,
        model_factory: Callable[[], BaseChatModel] | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize generator.

        Args:
            prompt: Chat template taking a {document_text} variable
            model: Chat model instance (built lazily from model_factory if None)
            model_factory: Zero-argument factory for the chat model
            timeout_seconds: Hard limit for the model call
        """
        if model is None and model_factory is None:
            raise ValueError("Either model or model_factory is required")
        self._prompt = prompt
        self._model = model
        self._model_factory = model_factory
        self._timeout_seconds = timeout_seconds

    def _get_model(self) -> BaseChatModel:
        if self._model is None:
            self._model = self._model_factory()
        return self._model

    async def _call(self, document_text: str) -> GenerationOutcome[SchemaT]:
        """Run the single attempt and decode the reply."""
        try:
            messages = self._prompt.format_messages(document_text=document_text)
            model = self._get_model()
            response = await asyncio.wait_for(
                model.ainvoke(messages),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            return self._fail(
                GenerationError("Model call timed out", GenerationError.TIMEOUT,
                                {"timeout_seconds": self._timeout_seconds})
            )
        except Exception as e:
            # Quota, network, auth and client construction failures alike
            return self._fail(
                GenerationError("Model call failed", GenerationError.UPSTREAM_ERROR,
                                {"error_type": type(e).__name__})
            )

        raw = strip_code_fence(message_text(getattr(response, "content", None)))
        if not raw:
            return self._fail(GenerationError("Model returned no content", GenerationError.EMPTY_RESPONSE))

        try:
            payload = self.schema.model_validate_json(raw)
        except ValidationError as e:
            return self._fail(
                GenerationError("Model output violated the schema", GenerationError.MALFORMED_OUTPUT,
                                {"error_count": e.error_count()})
            )

        logger.info(f"{type(self).__module__}:{self.operation} - Model output decoded")
        return GenerationOutcome.success(payload)

    def _fail(self, error: GenerationError) -> GenerationOutcome[Any]:
        logger.warning(
            f"{type(self).__module__}:{self.operation} - Generation failed, falling back",
            extra={"reason": error.reason, **{k: v for k, v in error.details.items() if k != "reason"}},
        )
        return GenerationOutcome.failure(error)
