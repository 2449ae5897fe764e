"""
FastAPI application for the auto-translate service.
This module sets up the API server with routes, metrics, and error handling.
"""

import logging
import sys
from contextlib import asynccontextmanager

from auto_translate.core.config import get_settings
from auto_translate.core.error_handlers import (
    base_exception_handler,
    unhandled_exception_handler,
)
from auto_translate.core.exceptions import BaseAppException
from auto_translate.routes import health, translation
from auto_translate.services.translation.bootstrap import (
    init_translator,
    options_from_settings,
)
from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator

# Configure logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("auto_translate.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Application startup...")

    settings = get_settings()
    app.state.settings = settings

    logger.info("Initializing translator...")
    translation_service = init_translator(options_from_settings(settings), settings)
    app.state.translation_service = translation_service

    # Yield control to the application
    yield

    # Shutdown
    logger.info("Application shutdown...")

    try:
        if settings.SAVE_DICTIONARY_ON_SHUTDOWN:
            logger.info("Saving dictionaries...")
            translation_service.save_dictionary()
    finally:
        await translation_service.aclose()


# Create FastAPI application
app = FastAPI(
    title=get_settings().PROJECT_NAME,
    docs_url="/api/docs",
    openapi_url=f"{get_settings().API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.add_exception_handler(BaseAppException, base_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# Set up Prometheus metrics
# DON'T call .expose() - we serve /metrics ourselves from the default REGISTRY
instrumentator = Instrumentator(
    should_group_status_codes=False,
    should_ignore_untemplated=True,
    should_respect_env_var=False,  # Always enable metrics
    excluded_handlers=["/health", "/health/live", "/metrics"],
)
instrumentator.instrument(app)
logger.info("Prometheus metrics instrumentation initialized")


@app.get("/metrics")
async def metrics() -> Response:
    """Expose Prometheus metrics from the default registry."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(health.router, tags=["Health"])
app.include_router(
    translation.router, prefix=get_settings().API_V1_STR, tags=["Translation"]
)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    # Bind to 0.0.0.0 only in DEBUG mode (container/development)
    host = "0.0.0.0" if settings.DEBUG else "127.0.0.1"

    uvicorn.run(
        "auto_translate.main:app",
        host=host,
        port=8000,
        reload=settings.DEBUG,
    )
