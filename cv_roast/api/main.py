"""
ASGI entry point.

Builds the FastAPI app, mounts the routers under the configured prefix and
owns the lifecycle of the shared session store.

Run locally with `python -m cv_roast.api.main` or
`uvicorn cv_roast.api.main:app`.

Dependencies: fastapi, uvicorn, cv_roast.api.routers, cv_roast.observability
System role: Application assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cv_roast.api.deps.dependencies import get_service_cache
from cv_roast.configs import get_settings
from cv_roast.observability.logger import configure_logging
from cv_roast.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import analyze_router, deep_analysis_router, health_router, sessions_router

logger = logging.getLogger(__name__)

ROUTERS = (health_router, analyze_router, deep_analysis_router, sessions_router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the pipeline before the first request; close the store on shutdown."""
    configure_logging(get_settings().log_level)

    cache = get_service_cache()
    pipeline = cache.pipeline
    logger.info(
        f"{__name__}:lifespan - Pipeline ready",
        extra={"store": type(cache.store).__name__, "pipeline": type(pipeline).__name__},
    )

    yield

    await cache.aclose()
    logger.info(f"{__name__}:lifespan - Session store closed")


def create_app() -> FastAPI:
    """
    Assemble the application.

    Returns:
        FastAPI: App with middleware and all routers mounted under
            settings.api_prefix
    """
    settings = get_settings()
    app = FastAPI(
        title="CV Roast API",
        description="Sarcastic document critique with session-scoped deep analysis",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it runs first and the access log sees the ID
    app.add_middleware(CorrelationMiddleware)

    for router in ROUTERS:
        app.include_router(router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("cv_roast.api.main:app", host=settings.host, port=settings.port)
