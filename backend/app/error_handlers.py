"""
Custom exception handlers for FastAPI.

Response envelopes:
- ``ApiError`` subclasses: ``{"msg": ...}`` (or ``{"errors": [...]}``) with their own status
- request body validation: 400 ``{"errors": [{"msg", "param", "location"}, ...]}``
- anything else: 500 with a plain-text ``Server Error`` body

Request IDs are logged server-side for tracing but not exposed to clients.
"""

from typing import Any

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from devconnect.errors import ApiError, ServerError, StorageError
from devconnect.logging import get_logger

from .schemas import INVALID_DATE_MESSAGES, REQUIRED_FIELD_MESSAGES

logger = get_logger("backend.errors")


def _get_request_id(request: Request) -> str:
    """Get the request ID set by RequestIDMiddleware, falling back to the logging context."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or structlog.contextvars.get_contextvars().get("request_id", "-")


def _server_error_response() -> PlainTextResponse:
    return PlainTextResponse(ServerError().msg, status_code=500)


def _validation_entry(error: dict[str, Any]) -> dict[str, Any]:
    """Convert one pydantic error into the public ``errors`` entry format."""
    loc = error.get("loc") or ()
    location = str(loc[0]) if loc else "body"
    param = str(loc[-1]) if len(loc) > 1 else location

    msg = error.get("msg", "Invalid value")
    is_blank = error.get("type") in ("missing", "string_too_short") or error.get("input") in (None, "")
    if param in REQUIRED_FIELD_MESSAGES and is_blank:
        msg = REQUIRED_FIELD_MESSAGES[param]
    elif param in INVALID_DATE_MESSAGES and str(error.get("type", "")).startswith("date"):
        msg = INVALID_DATE_MESSAGES[param]

    return {"msg": msg, "param": param, "location": location}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.warning(
            "api_error",
            error_type=type(exc).__name__,
            detail=exc.msg,
            status_code=exc.status_code,
            request_id=_get_request_id(request),
        )
        if isinstance(exc, ServerError):
            return _server_error_response()
        return JSONResponse(status_code=exc.status_code, content=exc.payload())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [_validation_entry(error) for error in exc.errors()]
        logger.warning(
            "validation_error",
            params=[error["param"] for error in errors],
            request_id=_get_request_id(request),
        )
        return JSONResponse(status_code=400, content={"errors": errors})

    async def _log_and_fail(request: Request, exc: Exception):
        # Log full details server-side; the client only sees "Server Error"
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(request),
        )
        return _server_error_response()

    # Known fault families are handled here so they never reach the
    # server-error middleware.
    for exc_class in (StorageError, SQLAlchemyError, httpx.HTTPError):
        app.add_exception_handler(exc_class, _log_and_fail)

    app.add_exception_handler(Exception, _log_and_fail)
