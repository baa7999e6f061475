"""Database entity models - represents the actual structure stored in MongoDB"""

from .base import BaseEntity, PyObjectId
from .insight_history import InsightHistory
from .user import User

__all__ = [
    "BaseEntity",
    "PyObjectId",
    "InsightHistory",
    "User",
]
