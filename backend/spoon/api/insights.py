"""Insight generation endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from pymongo.database import Database
from pymongo.errors import PyMongoError

from spoon.core.tracing import TracingContext
from spoon.database.mongo import get_db
from spoon.dtos.insight import InsightRequest
from spoon.dtos.user import CurrentUser
from spoon.middleware.auth import get_current_user
from spoon.services.cooldown import CooldownTracker
from spoon.services.exceptions import (
    RateLimitError,
    SpoonError,
    UpstreamFailure,
    ValidationError,
)
from spoon.services.github.repo_url import parse_repo_url
from spoon.services.history_service import HistoryService
from spoon.services.insights_service import InsightsService
from spoon.utils.datetime import utc_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights", tags=["Insights"])


def get_cooldown(request: Request) -> CooldownTracker:
    return request.app.state.cooldown


def get_insights_service() -> InsightsService:
    return InsightsService.from_settings()


@router.post("")
async def generate_insights(
    payload: Optional[InsightRequest] = Body(default=None),
    current_user: CurrentUser = Depends(get_current_user),
    cooldown: CooldownTracker = Depends(get_cooldown),
    service: InsightsService = Depends(get_insights_service),
    db: Database = Depends(get_db),
):
    """Generate insights for a GitHub repository and record them in the caller's history."""
    repo_url = (payload or InsightRequest()).repoUrl
    if not repo_url:
        raise ValidationError("Missing repository URL")
    ref = parse_repo_url(repo_url)

    TracingContext.set(
        correlation_id=TracingContext.generate_correlation_id(),
        user_id=current_user.id,
        repo=ref.full_name,
    )
    try:
        if not cooldown.try_acquire(repo_url):
            raise RateLimitError(
                "Please wait a moment before requesting the same repository again",
                retry_after=cooldown.retry_after(repo_url),
            )

        try:
            generated = await service.generate(repo_url)
        except SpoonError:
            raise
        except Exception as exc:
            logger.exception(f"Error generating insights for {ref.full_name}")
            raise UpstreamFailure(str(exc) or "An unexpected error occurred") from exc

        try:
            HistoryService(db).save_insight(
                current_user.id,
                generated.insight,
                owner=ref.owner,
                stars=generated.stars,
                forks=generated.forks,
            )
        except (SpoonError, PyMongoError):
            # The caller still gets the insight when history storage fails.
            logger.exception(f"Failed to save insight history for {ref.full_name}")

        return {
            "success": True,
            "data": generated.insight.model_dump(mode="json", by_alias=True),
            "timestamp": utc_timestamp(),
            "user": {"name": current_user.name, "email": current_user.email},
        }
    finally:
        TracingContext.clear()


@router.get("/health")
async def insights_health(current_user: CurrentUser = Depends(get_current_user)):
    return {
        "status": "OK",
        "service": "Insights API",
        "timestamp": utc_timestamp(),
        "authenticated": True,
        "user": {"name": current_user.name, "email": current_user.email},
    }


@router.get("/user")
async def insights_user(current_user: CurrentUser = Depends(get_current_user)):
    return {
        "success": True,
        "user": {
            "id": current_user.id,
            "name": current_user.name,
            "email": current_user.email,
            "picture": current_user.picture,
        },
    }
