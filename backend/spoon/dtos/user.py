"""User and authentication DTOs"""

from typing import Optional

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Identity decoded from the bearer token."""

    id: str
    google_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None


class GoogleProfile(BaseModel):
    """Subset of the Google userinfo payload used to upsert a user."""

    sub: str
    name: str
    email: Optional[str] = None
    picture: Optional[str] = None
