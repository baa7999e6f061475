"""
InsightHistory Entity - one stored repository analysis.

Documents live in the ``insight_history`` collection. ``technologies`` and
``insights`` hold JSON text: the stored payload is opaque to the database
and only decoded when read back through the history service.
"""

from typing import Optional

from pydantic import Field

from .base import BaseEntity, PyObjectId


class InsightHistory(BaseEntity):
    """Immutable record of one successful analysis, owned by one user."""

    user_id: PyObjectId = Field(..., description="Owner of the record")
    repo_url: str
    repo_name: str
    repo_owner: str
    summary: Optional[str] = None
    technologies: str = Field("[]", description="JSON-encoded list of technologies")
    insights: str = Field("{}", description="JSON-encoded insight payload")
    stars: int = 0
    forks: int = 0
