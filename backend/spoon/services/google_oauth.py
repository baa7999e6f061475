"""Google OAuth helper utilities (MongoDB-backed state)."""
from __future__ import annotations

import uuid
from typing import Optional
from urllib.parse import urlencode

import httpx
from pymongo.database import Database

from spoon.config import settings
from spoon.dtos.user import GoogleProfile
from spoon.repositories.base import storage_errors
from spoon.services.exceptions import AuthError, UpstreamFailure, ValidationError
from spoon.utils.datetime import utc_now

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USER_INFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


def _require_google_credentials() -> None:
    if not settings.GOOGLE_CLIENT_ID or not settings.GOOGLE_CLIENT_SECRET:
        raise UpstreamFailure("Google OAuth credentials are not configured")


def build_google_authorize_url(state: str) -> str:
    """Build the Google OAuth consent URL."""
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": "openid email profile",
        "state": state,
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


def create_oauth_state(db: Database) -> str:
    _require_google_credentials()
    state = uuid.uuid4().hex
    with storage_errors("create_oauth_state"):
        db.oauth_states.insert_one({"_id": state, "created_at": utc_now()})
    return state


def consume_oauth_state(db: Database, state: Optional[str]) -> None:
    """States are single use; expired ones are dropped by the TTL index."""
    if not state:
        raise ValidationError("Invalid or expired OAuth state")
    with storage_errors("consume_oauth_state"):
        consumed = db.oauth_states.find_one_and_delete({"_id": state})
    if consumed is None:
        raise ValidationError("Invalid or expired OAuth state")


def _json_object(response: httpx.Response, message: str) -> dict:
    try:
        payload = response.json()
    except ValueError as exc:
        raise AuthError(message) from exc
    if not isinstance(payload, dict):
        raise AuthError(message)
    return payload


async def exchange_code_for_profile(
    code: str, transport: Optional[httpx.AsyncBaseTransport] = None
) -> GoogleProfile:
    """Exchange the authorization code and fetch the signed-in user's profile."""
    _require_google_credentials()

    async with httpx.AsyncClient(timeout=10, transport=transport) as client:
        try:
            token_response = await client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "client_id": settings.GOOGLE_CLIENT_ID,
                    "client_secret": settings.GOOGLE_CLIENT_SECRET,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": settings.GOOGLE_REDIRECT_URI,
                },
            )
            if token_response.status_code != 200:
                raise AuthError("Failed to exchange code for Google token")

            token_data = _json_object(token_response, "Google did not return an access token")
            access_token = token_data.get("access_token")
            if not access_token:
                raise AuthError("Google did not return an access token")

            user_response = await client.get(
                GOOGLE_USER_INFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            raise UpstreamFailure(f"Google OAuth request failed: {exc}") from exc

    if user_response.status_code != 200:
        raise AuthError("Failed to get Google user info")

    info = _json_object(user_response, "Failed to get Google user info")
    if not info.get("sub"):
        raise AuthError("Google user info has no subject")
    return GoogleProfile(
        sub=str(info["sub"]),
        name=info.get("name") or info.get("email") or "Google user",
        email=info.get("email"),
        picture=info.get("picture"),
    )
