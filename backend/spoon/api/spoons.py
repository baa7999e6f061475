"""Saved analysis ("spoon") history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from pymongo.database import Database

from spoon.config import settings
from spoon.database.mongo import get_db
from spoon.dtos.insight import SaveHistoryRequest
from spoon.dtos.user import CurrentUser
from spoon.middleware.auth import get_current_user
from spoon.services.exceptions import NotFoundError
from spoon.services.history_service import HistoryService

router = APIRouter(prefix="/spoons", tags=["History"])


@router.post("/history")
def save_spoon(
    payload: SaveHistoryRequest,
    db: Database = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    service = HistoryService(db)
    spoon = service.save(current_user.id, **payload.model_dump())
    return {
        "success": True,
        "message": "Spoon analysis saved successfully",
        "spoon": spoon.model_dump(mode="json"),
    }


@router.get("/history")
def list_spoons(
    page: int = Query(1),
    limit: int = Query(settings.HISTORY_PAGE_SIZE),
    db: Database = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Paginated history, most recent first. Values below 1 fall back to the defaults."""
    if page < 1:
        page = 1
    if limit < 1:
        limit = settings.HISTORY_PAGE_SIZE

    result = HistoryService(db).list(current_user.id, page=page, limit=limit)
    return {
        "success": True,
        "history": [item.model_dump(mode="json") for item in result.items],
        "pagination": result.pagination(),
    }


@router.get("/history/{spoon_id}")
def get_spoon(
    spoon_id: str = Path(...),
    db: Database = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    spoon = HistoryService(db).get_one(spoon_id, current_user.id)
    if spoon is None:
        raise NotFoundError("Spoon not found")
    return {"success": True, "spoon": spoon.model_dump(mode="json")}


@router.delete("/history/{spoon_id}")
def delete_spoon(
    spoon_id: str = Path(...),
    db: Database = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    if not HistoryService(db).delete(spoon_id, current_user.id):
        raise NotFoundError("Spoon not found or already deleted")
    return {"success": True, "message": "Spoon deleted successfully"}
