"""
Configuration package.

Typed settings read from environment variables and .env via pydantic-settings.
"""

from cv_roast.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
