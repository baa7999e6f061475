"""Bearer-token authentication: issue and verify the app's JWT access tokens."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from spoon.config import settings
from spoon.dtos.user import CurrentUser
from spoon.entities.user import User
from spoon.services.exceptions import AuthError

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    expire = datetime.now(timezone.utc) + expires_delta
    payload: dict[str, Any] = {
        "sub": str(user.id),
        "id": str(user.id),
        "google_id": user.google_id,
        "name": user.name,
        "email": user.email,
        "picture": user.picture,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """Decode a token; AuthError(403) when it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise AuthError("Invalid or expired token", status_code=403) from exc

    user_id = payload.get("id") or payload.get("sub")
    if not user_id:
        raise AuthError("Invalid or expired token", status_code=403)

    return CurrentUser(
        id=str(user_id),
        google_id=payload.get("google_id"),
        name=payload.get("name"),
        email=payload.get("email"),
        picture=payload.get("picture"),
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required", status_code=401)
    return decode_access_token(credentials.credentials)
