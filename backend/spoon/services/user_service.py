"""User account service using repository pattern"""

import logging

from pymongo.database import Database

from spoon.dtos.user import GoogleProfile
from spoon.entities.user import User
from spoon.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Database):
        self.db = db
        self.repo = UserRepository(db)

    def register_login(self, profile: GoogleProfile) -> User:
        """Create the user on first login; refresh name, email and picture on later ones."""
        user = self.repo.upsert_by_google_id(
            google_id=profile.sub,
            name=profile.name,
            email=profile.email,
            picture=profile.picture,
        )
        logger.info(f"User {user.id} signed in")
        return user
