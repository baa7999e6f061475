"""Error codes and handlers for standardized API error responses.

Every error leaves the API as ``{"success": false, "error": <code>, "message": <text>}``
so clients can branch on ``error`` without parsing messages.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_TO_ERROR_CODE: dict[int, ErrorCode] = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
    429: ErrorCode.RATE_LIMITED,
    500: ErrorCode.INTERNAL_ERROR,
}


def get_error_code(status_code: int) -> ErrorCode:
    """Get ErrorCode from HTTP status code."""
    return STATUS_TO_ERROR_CODE.get(status_code, ErrorCode.INTERNAL_ERROR)


def error_response(
    status_code: int,
    message: str,
    error_code: Optional[ErrorCode] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    code = error_code or get_error_code(status_code)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": code.value, "message": message},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the handlers that render SpoonError and framework errors uniformly."""
    from spoon.services.exceptions import RateLimitError, SpoonError

    @app.exception_handler(SpoonError)
    async def _spoon_error(request: Request, exc: SpoonError) -> JSONResponse:
        headers = None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            headers = {"Retry-After": str(max(1, int(round(exc.retry_after))))}
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message, exc.error_code, headers)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, "Invalid request payload", ErrorCode.VALIDATION_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))
