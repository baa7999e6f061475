"""Per-user insight history: save, paginated list, get and delete."""

from __future__ import annotations

import json
import logging
import math
from typing import List, Optional

from pymongo.database import Database

from spoon.dtos.insight import HistoryPage, Insight, PersistedInsight
from spoon.entities.insight_history import InsightHistory
from spoon.repositories.insight_history import InsightHistoryRepository
from spoon.services.exceptions import ValidationError
from spoon.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def _loads(value: Optional[str], default):
    if not value:
        return default
    try:
        return json.loads(value)
    except ValueError:
        logger.warning("Stored history field is not valid JSON; returning default")
        return default


def to_persisted(record: InsightHistory) -> PersistedInsight:
    """Decode the JSON text fields of a stored record."""
    technologies = _loads(record.technologies, [])
    insights = _loads(record.insights, {})
    return PersistedInsight(
        id=str(record.id),
        user_id=str(record.user_id),
        repo_url=record.repo_url,
        repo_name=record.repo_name,
        repo_owner=record.repo_owner,
        summary=record.summary,
        technologies=technologies if isinstance(technologies, list) else [],
        insights=insights if isinstance(insights, dict) else {},
        stars=record.stars,
        forks=record.forks,
        created_at=record.created_at,
    )


class HistoryService:
    """History store scoped to one owning user per call; never crosses users."""

    def __init__(self, db: Database):
        self.db = db
        self.repo = InsightHistoryRepository(db)

    def save(
        self,
        user_id: str,
        *,
        repo_url: str,
        repo_name: str,
        repo_owner: str,
        summary: Optional[str],
        technologies: List[str],
        insights: dict,
        stars: int = 0,
        forks: int = 0,
    ) -> PersistedInsight:
        """Insert one immutable record (a single insert_one)."""
        user_oid = self.repo._to_object_id(user_id)
        if user_oid is None:
            raise ValidationError(f"Invalid user id: {user_id!r}")
        now = utc_now()
        record = InsightHistory(
            user_id=user_oid,
            repo_url=repo_url,
            repo_name=repo_name,
            repo_owner=repo_owner,
            summary=summary,
            technologies=json.dumps(technologies),
            insights=json.dumps(insights),
            stars=stars or 0,
            forks=forks or 0,
            created_at=now,
            updated_at=now,
        )
        saved = self.repo.insert_one(record)
        logger.info(f"Saved insight for {repo_owner}/{repo_name} (user {user_id})")
        return to_persisted(saved)

    def save_insight(
        self, user_id: str, insight: Insight, owner: str, stars: int = 0, forks: int = 0
    ) -> PersistedInsight:
        """Persist a freshly generated insight."""
        return self.save(
            user_id,
            repo_url=insight.repo_url,
            repo_name=insight.name,
            repo_owner=owner,
            summary=insight.summary,
            technologies=list(insight.technologies),
            insights=insight.model_dump(mode="json", by_alias=True),
            stars=stars,
            forks=forks,
        )

    def list(self, user_id: str, page: int = 1, limit: int = 5) -> HistoryPage:
        """
        One page of a user's history, most recent first.

        ``page`` and ``limit`` must be >= 1.
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be >= 1")

        records, total = self.repo.list_by_user(user_id, skip=(page - 1) * limit, limit=limit)
        total_pages = math.ceil(total / limit)
        return HistoryPage(
            items=[to_persisted(record) for record in records],
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    def get_one(self, record_id: str, user_id: str) -> Optional[PersistedInsight]:
        record = self.repo.find_owned(record_id, user_id)
        return to_persisted(record) if record else None

    def delete(self, record_id: str, user_id: str) -> bool:
        deleted = self.repo.delete_owned(record_id, user_id)
        if deleted:
            logger.info(f"Deleted insight {record_id} for user {user_id}")
        return deleted
