"""Generic repository over a single MongoDB collection."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from spoon.entities.base import BaseEntity
from spoon.services.exceptions import StorageFailure

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)

SortSpec = Sequence[Tuple[str, int]]


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise any pymongo failure as StorageFailure."""
    try:
        yield
    except PyMongoError as exc:
        logger.error(f"Storage operation '{operation}' failed: {exc}")
        raise StorageFailure(f"Storage operation '{operation}' failed") from exc


class BaseRepository(Generic[T]):
    """Typed CRUD helpers shared by all repositories."""

    def __init__(self, db: Database, collection_name: str, model_class: Type[T]):
        self.db = db
        self.collection = db[collection_name]
        self.model_class = model_class

    @staticmethod
    def _to_object_id(value: Any) -> Optional[ObjectId]:
        """Convert to ObjectId; returns None for malformed ids."""
        if isinstance(value, ObjectId):
            return value
        try:
            return ObjectId(value)
        except (InvalidId, TypeError):
            return None

    def _to_entity(self, doc: Optional[dict]) -> Optional[T]:
        return self.model_class.model_validate(doc) if doc else None

    def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        with storage_errors("find_one"):
            doc = self.collection.find_one(query)
        return self._to_entity(doc)

    def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        with storage_errors("find_many"):
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort(list(sort))
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            docs = list(cursor)
        return [self.model_class.model_validate(doc) for doc in docs]

    def count(self, query: Dict[str, Any]) -> int:
        with storage_errors("count"):
            return self.collection.count_documents(query)

    def paginate(
        self,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[T], int]:
        """Return one page of entities plus the total matching count."""
        total = self.count(query)
        items = self.find_many(query, sort=sort, skip=skip, limit=limit)
        return items, total

    def insert_one(self, entity: T) -> T:
        doc = entity.to_mongo()
        with storage_errors("insert_one"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self.model_class.model_validate(doc)

    def delete_one(self, query: Dict[str, Any]) -> bool:
        with storage_errors("delete_one"):
            result = self.collection.delete_one(query)
        return result.deleted_count > 0
