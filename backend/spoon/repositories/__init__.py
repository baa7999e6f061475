"""Repository layer for database operations"""

from .base import BaseRepository
from .insight_history import InsightHistoryRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "InsightHistoryRepository",
    "UserRepository",
]
