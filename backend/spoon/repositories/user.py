"""User Repository - accounts keyed by their Google identity."""

from typing import Optional

from pymongo import ReturnDocument

from spoon.entities.user import User
from spoon.utils.datetime import utc_now

from .base import BaseRepository, storage_errors


class UserRepository(BaseRepository[User]):
    """Repository for User entities."""

    def __init__(self, db):
        super().__init__(db, "users", User)

    def upsert_by_google_id(
        self,
        google_id: str,
        name: str,
        email: Optional[str],
        picture: Optional[str],
    ) -> User:
        """Create the user on first login, refresh name/email/picture afterwards."""
        now = utc_now()
        with storage_errors("upsert_user"):
            doc = self.collection.find_one_and_update(
                {"google_id": google_id},
                {
                    "$set": {
                        "name": name,
                        "email": email,
                        "picture": picture,
                        "updated_at": now,
                    },
                    # google_id comes from the query on insert
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        return User.model_validate(doc)
