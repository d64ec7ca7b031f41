"""Map domain exceptions to ``{"error": ...}`` JSON responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vcscout.core.exceptions import (
    ConfigurationError,
    ExtractionError,
    InputValidationError,
    VCScoutError,
)
from vcscout.core.logging import api_logger as logger

GENERIC_ERROR_MESSAGE = "Failed to enrich company data"


def status_for(exc: Exception) -> int:
    if isinstance(exc, ConfigurationError):
        return 503
    if isinstance(exc, InputValidationError):
        return 400
    if isinstance(exc, ExtractionError) and exc.is_auth_failure:
        return 401
    return 500


def error_response(exc: Exception) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, VCScoutError):
        message = exc.message
    else:
        message = GENERIC_ERROR_MESSAGE

    log = logger.warning if status_code < 500 else logger.error
    log(
        "enrichment_request_failed",
        status=status_code,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=status_code, content={"error": message})


async def vcscout_error_handler(request: Request, exc: VCScoutError) -> JSONResponse:
    return error_response(exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VCScoutError, vcscout_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
