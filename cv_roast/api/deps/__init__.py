"""FastAPI dependencies."""

from cv_roast.api.deps.dependencies import (
    ServiceCache,
    get_critique_pipeline,
    get_service_cache,
    get_session_store_dependency,
    get_upload_settings,
)

__all__ = [
    "ServiceCache",
    "get_critique_pipeline",
    "get_service_cache",
    "get_session_store_dependency",
    "get_upload_settings",
]
