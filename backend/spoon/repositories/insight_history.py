"""
InsightHistory Repository - per-user analysis history.

Every query is filtered on ``user_id``: a record is only visible to, and only
deletable by, its owner.
"""

from typing import List, Optional, Tuple

from pymongo import DESCENDING

from spoon.entities.insight_history import InsightHistory

from .base import BaseRepository

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


class InsightHistoryRepository(BaseRepository[InsightHistory]):
    """Repository for InsightHistory entities."""

    def __init__(self, db):
        super().__init__(db, "insight_history", InsightHistory)

    def list_by_user(
        self, user_id: str, skip: int = 0, limit: int = 5
    ) -> Tuple[List[InsightHistory], int]:
        """
        List a user's history, most recent first.

        Args:
            user_id: Owner id
            skip: Pagination offset
            limit: Page size

        Returns:
            Tuple of (records, total count for the user)
        """
        oid = self._to_object_id(user_id)
        if oid is None:
            return [], 0
        return self.paginate({"user_id": oid}, sort=NEWEST_FIRST, skip=skip, limit=limit)

    def find_owned(self, record_id: str, user_id: str) -> Optional[InsightHistory]:
        """Find a record only if it belongs to ``user_id``."""
        record_oid = self._to_object_id(record_id)
        user_oid = self._to_object_id(user_id)
        if record_oid is None or user_oid is None:
            return None
        return self.find_one({"_id": record_oid, "user_id": user_oid})

    def delete_owned(self, record_id: str, user_id: str) -> bool:
        """Delete a record only if it belongs to ``user_id``. Returns whether a row went away."""
        record_oid = self._to_object_id(record_id)
        user_oid = self._to_object_id(user_id)
        if record_oid is None or user_oid is None:
            return False
        return self.delete_one({"_id": record_oid, "user_id": user_oid})
