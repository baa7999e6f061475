from __future__ import annotations

from typing import Optional

from .base import BaseEntity


class User(BaseEntity):
    google_id: str
    name: str
    email: Optional[str] = None
    picture: Optional[str] = None
