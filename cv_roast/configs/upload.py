"""
Upload validation settings.

Dependencies: pydantic_settings
System role: Limits applied to uploaded documents before extraction
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UploadSettings(BaseSettings):
    """Constraints for documents accepted by the analyze endpoint."""

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size_bytes: int = Field(default=25 * 1024 * 1024, gt=0)
    allowed_extensions: set[str] = Field(default={".pdf"})
