from __future__ import annotations

"""
MongoDB connection helpers.
"""

import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

_client: MongoClient | None = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        # Import settings lazily to ensure env vars are loaded
        from spoon.config import settings

        logger.info("Initializing MongoClient for database %s", settings.MONGODB_DB_NAME)
        _client = MongoClient(settings.MONGODB_URI)
    return _client


def get_database() -> Database:
    from spoon.config import settings

    client = get_client()
    return client[settings.MONGODB_DB_NAME]


def get_db():
    db = get_database()
    try:
        yield db
    finally:
        # PyMongo manages connection pooling automatically; nothing to close here.
        pass


def ensure_indexes(db: Database) -> None:
    """Create the indexes the users and history collections rely on."""
    db.users.create_index([("google_id", ASCENDING)], unique=True)
    db.insight_history.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    db.oauth_states.create_index([("created_at", ASCENDING)], expireAfterSeconds=600)
