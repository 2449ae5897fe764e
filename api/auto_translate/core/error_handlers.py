"""
Error handlers for the auto-translate API.

Every error response uses the same envelope:
    {"error": {"code": ..., "message": ..., "status_code": ...}}
"""

import logging
from typing import Any, Dict

from auto_translate.core.exceptions import BaseAppException, ProviderError
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, status_code: int, **extra: Any) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "status_code": status_code,
            **extra,
        }
    }


async def base_exception_handler(
    request: Request, exc: BaseAppException
) -> JSONResponse:
    """Translate application exceptions into the error envelope.

    Provider failures also report which provider failed. Client errors are
    logged as warnings, upstream failures as errors.
    """
    extra = {}
    if isinstance(exc, ProviderError):
        extra["provider"] = exc.provider

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} failed: {exc.error_code} - {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.detail, exc.status_code, **extra),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic 500 without internal details."""
    logger.exception(f"Unhandled {type(exc).__name__} on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        ),
    )
