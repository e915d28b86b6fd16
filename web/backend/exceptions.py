#!/usr/bin/env python3
"""
Error handlers for the web application.

Ranking errors map to HTTP status codes: caller mistakes (ConfigurationError
and subclasses) to 400, unknown ids (NotFoundError) to 404.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import RankingError, ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": error_type
        }
    )


async def ranking_exception_handler(
    request: Request,
    exc: RankingError
) -> JSONResponse:
    """
    Handle ranking core exceptions.

    Args:
        request: The FastAPI request.
        exc: The ranking exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, ConfigurationError):
        status_code = 400

    if status_code == 500:
        logger.error(f"Ranking error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"Rejected request to {request.url.path}: {exc}")

    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
