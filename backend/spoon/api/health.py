"""
Health check endpoints
"""

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from spoon.config import settings
from spoon.database.mongo import get_db
from spoon.utils.datetime import utc_timestamp

router = APIRouter()


@router.get("/health")
async def health_check():
    """Simple API health check."""
    return {
        "status": "OK",
        "timestamp": utc_timestamp(),
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/health/db")
def database_health(db: Database = Depends(get_db)):
    """MongoDB health check."""
    try:
        db.command("ping")
    except PyMongoError as exc:
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(exc),
            "timestamp": utc_timestamp(),
        }

    return {
        "status": "healthy",
        "database": "connected",
        "timestamp": utc_timestamp(),
    }
