import json
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from pymongo.database import Database

from spoon.config import settings
from spoon.database.mongo import get_db
from spoon.dtos.user import CurrentUser
from spoon.middleware.auth import create_access_token, get_current_user
from spoon.services.google_oauth import (
    build_google_authorize_url,
    consume_oauth_state,
    create_oauth_state,
    exchange_code_for_profile,
)
from spoon.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/google")
def google_login(db: Database = Depends(get_db)):
    """Redirect the browser to the Google consent screen."""
    state = create_oauth_state(db)
    return RedirectResponse(url=build_google_authorize_url(state))


@router.get("/google/callback")
async def google_oauth_callback(
    code: str = Query(..., description="Google authorization code"),
    state: str = Query(..., description="OAuth state token"),
    db: Database = Depends(get_db),
):
    """Exchange the code, upsert the user and hand a token back to the frontend."""
    consume_oauth_state(db, state)
    profile = await exchange_code_for_profile(code)
    user = UserService(db).register_login(profile)
    token = create_access_token(user)

    user_payload = {
        "id": str(user.id),
        "google_id": user.google_id,
        "name": user.name,
        "email": user.email,
        "picture": user.picture,
    }
    query = urlencode({"token": token, "user": json.dumps(user_payload)})
    return RedirectResponse(url=f"{settings.FRONTEND_URL.rstrip('/')}/auth/callback?{query}")


@router.get("/verify")
async def verify_token(current_user: CurrentUser = Depends(get_current_user)):
    return current_user.model_dump()


@router.post("/logout")
async def logout():
    # Tokens are stateless; the client discards its copy.
    return {"success": True}
