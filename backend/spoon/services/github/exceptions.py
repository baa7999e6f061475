"""Exceptions raised by the GitHub repository collector."""

from __future__ import annotations

from spoon.services.exceptions import (
    AuthError,
    NotFoundError,
    RateLimitError,
    UpstreamFailure,
)


class GithubError(Exception):
    """Base exception for GitHub collection failures."""


class GithubNotFoundError(GithubError, NotFoundError):
    """Raised when the repository does not exist or is private (HTTP 404)."""

    def __init__(self, message: str = "Repository not found"):
        NotFoundError.__init__(self, message)


class GithubRateLimitError(GithubError, RateLimitError):
    """Raised when GitHub rejects the request with HTTP 403."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | float | None = None):
        RateLimitError.__init__(self, message, retry_after=retry_after)


class GithubUnauthorizedError(GithubError, AuthError):
    """Raised when the configured GitHub token is rejected (HTTP 401)."""

    def __init__(self, message: str = "Invalid API key"):
        AuthError.__init__(self, message, status_code=401)


class GithubUpstreamError(GithubError, UpstreamFailure):
    """Raised for every other GitHub failure (status, transport, timeout, payload)."""

    def __init__(self, message: str = "Failed to fetch GitHub data"):
        UpstreamFailure.__init__(self, message)
