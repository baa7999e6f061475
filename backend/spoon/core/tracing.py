"""
Tracing Context - per-request context for log correlation.

The insights route sets the context when a request starts so that every log
line emitted while the pipeline runs (collector, requester, history store)
carries the same correlation id, user and repository.

Usage:
    TracingContext.set(correlation_id="abc-123", user_id="42", repo="octocat/hello")
    ctx = TracingContext.get()
    TracingContext.clear()
"""

import uuid
from contextvars import ContextVar
from typing import Dict

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_user_id: ContextVar[str] = ContextVar("user_id", default="")
_repo: ContextVar[str] = ContextVar("repo", default="")


class TracingContext:
    """Context-local tracing fields (safe across interleaved async requests)."""

    @staticmethod
    def set(
        correlation_id: str = "",
        user_id: str = "",
        repo: str = "",
    ) -> None:
        """Set tracing context for current execution."""
        if correlation_id:
            _correlation_id.set(correlation_id)
        if user_id:
            _user_id.set(user_id)
        if repo:
            _repo.set(repo)

    @staticmethod
    def get() -> Dict[str, str]:
        """Get all tracing context as dict."""
        return {
            "correlation_id": _correlation_id.get(),
            "user_id": _user_id.get(),
            "repo": _repo.get(),
        }

    @staticmethod
    def generate_correlation_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def clear() -> None:
        _correlation_id.set("")
        _user_id.set("")
        _repo.set("")
