"""
Langfuse prompt registry for versioned critique prompts.

Publishes the local LangChain templates to Langfuse and fetches them back by
label. The local template is authoritative whenever Langfuse is disabled,
unconfigured, unreachable, or does not hold the requested prompt.

Dependencies: langfuse, langchain_core, cv_roast.configs
System role: Prompt version control and retrieval
"""

import logging
import re
from typing import Any

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.prompts.chat import (
    AIMessagePromptTemplate,
    HumanMessagePromptTemplate,
    SystemMessagePromptTemplate,
)
from langfuse import Langfuse

from cv_roast.configs import get_settings

logger = logging.getLogger(__name__)


# {var} -> {{var}}, leaving already-escaped {{literal}} braces alone
_VARIABLE = re.compile(r"(?<!\{)\{([A-Za-z_][A-Za-z0-9_]*)\}(?!\})")


def to_langfuse_messages(template: ChatPromptTemplate) -> list[dict[str, str]]:
    """
    Convert a ChatPromptTemplate into Langfuse chat messages.

    Args:
        template: Template built from system/human/ai message templates

    Returns:
        list[dict]: Messages with Langfuse {{variable}} syntax

    Raises:
        ValueError: If the template holds an unsupported message type
    """
    messages = []
    for message in template.messages:
        role = _role_of(message)
        content = message.prompt.template
        messages.append({"role": role, "content": _VARIABLE.sub(r"{{\1}}", content)})
    return messages


def _role_of(message: Any) -> str:
    if isinstance(message, SystemMessagePromptTemplate):
        return "system"
    if isinstance(message, HumanMessagePromptTemplate):
        return "user"
    if isinstance(message, AIMessagePromptTemplate):
        return "assistant"
    raise ValueError(f"Unsupported message type: {type(message).__name__}")


class PromptRegistry:
    """
    Singleton wrapper around the Langfuse prompt API.

    Attributes:
        _instance: Singleton instance
        _client: Langfuse client, None when disabled
        _enabled: Whether Langfuse integration is active
    """

    _instance: "PromptRegistry | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "PromptRegistry":
        """Singleton pattern for registry instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        obs_settings = get_settings().observability

        if not obs_settings.enable_tracing:
            logger.info("Langfuse disabled, prompt registry inactive")
            self._enabled = False
            return

        if not obs_settings.public_key or not obs_settings.secret_key:
            logger.warning("Langfuse keys not configured, prompt registry inactive")
            self._enabled = False
            return

        self._client = Langfuse(
            public_key=obs_settings.public_key,
            secret_key=obs_settings.secret_key,
            host=obs_settings.host,
        )
        self._enabled = True
        logger.info("Prompt registry initialized: host=%s", obs_settings.host)

    @property
    def is_enabled(self) -> bool:
        """Check if registry is active."""
        return self._enabled

    def register_prompt(
        self,
        name: str,
        template: ChatPromptTemplate,
        model: str,
        temperature: float | None = None,
        labels: list[str] | None = None,
    ) -> Any | None:
        """
        Create a prompt, or a new version of it, in Langfuse.

        Args:
            name: Prompt identifier
            template: Local chat template
            model: Model identifier stored as prompt config
            temperature: Sampling temperature stored as prompt config
            labels: Optional labels (e.g. ["production"])

        Returns:
            Langfuse prompt object, or None if the registry is disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, skipping registration: name=%s", name)
            return None

        config: dict[str, Any] = {"model": model}
        if temperature is not None:
            config["temperature"] = temperature

        prompt = self._client.create_prompt(
            name=name,
            type="chat",
            prompt=to_langfuse_messages(template),
            config=config,
            labels=labels or [],
        )
        logger.info("Registered chat prompt: name=%s version=%s", name, prompt.version)
        return prompt

    def get_chat_prompt(self, name: str, label: str | None = None) -> ChatPromptTemplate | None:
        """
        Fetch a chat prompt from Langfuse as a LangChain template.

        Args:
            name: Prompt identifier
            label: Optional label filter

        Returns:
            ChatPromptTemplate, or None when disabled or the lookup fails
        """
        if not self._enabled or self._client is None:
            return None

        kwargs: dict[str, Any] = {"name": name, "type": "chat"}
        if label:
            kwargs["label"] = label

        try:
            prompt = self._client.get_prompt(**kwargs)
        except Exception as e:
            logger.warning(
                "Prompt lookup failed, using local template: name=%s error_type=%s",
                name, type(e).__name__,
            )
            return None

        template = ChatPromptTemplate.from_messages(prompt.get_langchain_prompt())
        template.metadata = {"langfuse_prompt": prompt}
        return template
