"""Error taxonomy shared by the insights pipeline and the HTTP layer."""

from __future__ import annotations

from spoon.middleware.error_codes import ErrorCode


class SpoonError(Exception):
    """Base exception; carries the HTTP status and a stable error code."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SpoonError):
    """Bad input (repository URL, request shape). Never retried."""

    status_code = 400
    error_code = ErrorCode.VALIDATION_ERROR


class AuthError(SpoonError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    error_code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code
        if status_code == 403:
            self.error_code = ErrorCode.FORBIDDEN


class NotFoundError(SpoonError):
    """Repository or stored record is absent."""

    status_code = 404
    error_code = ErrorCode.NOT_FOUND


class RateLimitError(SpoonError):
    """Upstream rate limit or local cooldown; retry later."""

    status_code = 429
    error_code = ErrorCode.RATE_LIMITED

    def __init__(self, message: str, retry_after: int | float | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class ConflictError(SpoonError):
    """The same repository is already being processed."""

    status_code = 409
    error_code = ErrorCode.CONFLICT


class UpstreamFailure(SpoonError):
    """Any other collector or AI failure."""

    status_code = 500
    error_code = ErrorCode.INTERNAL_ERROR


class StorageFailure(SpoonError):
    """Raised when the storage engine rejects an operation."""

    status_code = 500
    error_code = ErrorCode.INTERNAL_ERROR
