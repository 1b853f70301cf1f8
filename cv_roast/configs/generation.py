"""
Generative model configuration settings.

Model identifiers, sampling parameters and the per-call timeout for the
critique and recommendation prompts.

Dependencies: pydantic_settings
System role: LLM configuration for critique generation
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationSettings(BaseSettings):
    """Gemini model configuration for critique and recommendation calls."""

    model_config = SettingsConfigDict(
        env_prefix="GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google AI API key (falls back to GOOGLE_API_KEY when unset)",
    )
    critique_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for the initial critique",
    )
    recommendation_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for the deep recommendation set",
    )
    critique_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    recommendation_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=1500, gt=0)
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Hard limit for a single model call; exceeding it counts as a failure",
    )
    use_prompt_registry: bool = Field(
        default=False,
        description="Fetch prompts from the Langfuse registry instead of local templates",
    )
    prompt_label: str | None = Field(
        default=None,
        description="Registry label to fetch (e.g. 'production')",
    )
