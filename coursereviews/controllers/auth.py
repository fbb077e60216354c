import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from coursereviews.config import config
from coursereviews.database import get_db
from coursereviews.middlewares.verify_token import REFRESH_TOKEN_COOKIE, verify_refresh_token
from coursereviews.models import User
from coursereviews.oauth2 import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    REFRESH_TOKEN_EXPIRE_DAYS,
    create_access_token,
    create_refresh_token,
    get_current_session,
    get_current_user_jwt,
    optional_session_bearer,
    token_remaining_seconds,
)
from coursereviews.schemas.auth import LogoutResponse, RefreshResponse
from coursereviews.schemas.user import SessionResponse, UserResponse
from coursereviews.security.json_bearer import ACCESS_TOKEN_COOKIE
from coursereviews.services.sso_service import SSOService
from coursereviews.services.token_blacklist import add_to_blacklist, is_blacklisted
from coursereviews.services.user_service import email_allowed, find_or_create_user

logger = logging.getLogger("coursereviews")

router = APIRouter(prefix="/auth", tags=["auth"])

OAUTH_STATE_COOKIE = "oauth_state"


def _landing_redirect(error: Optional[str] = None) -> RedirectResponse:
    url = f"{config.FRONTEND_URL}/"
    if error:
        url = f"{url}?{urlencode({'error': error})}"
    response = RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
    response.delete_cookie(key=OAUTH_STATE_COOKIE)
    return response


def _set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        samesite="lax",
        secure=config.COOKIE_SECURE,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=refresh_token,
        httponly=True,
        samesite="lax",
        secure=config.COOKIE_SECURE,
        max_age=REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


### ROUTE FOR LOGIN ###
@router.get("/login")
async def login():
    """Send the browser to Google, limited to the university's accounts."""
    state = SSOService.generate_state_param()
    response = RedirectResponse(
        url=SSOService.build_google_authorization_url(state=state),
        status_code=status.HTTP_302_FOUND,
    )
    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        httponly=True,
        samesite="lax",
        secure=config.COOKIE_SECURE,
        max_age=10 * 60,
    )
    return response


@router.get("/callback")
async def sso_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    oauth_state: Optional[str] = Cookie(None, alias=OAUTH_STATE_COOKIE),
    db: Session = Depends(get_db),
):
    if error:
        logger.error("SSO provider error: %s", error)
        return _landing_redirect("sso_failed")

    if not code or not state or state != oauth_state:
        logger.warning("Rejected sign-in callback with invalid state")
        return _landing_redirect("invalid_state")

    token_data = await SSOService.exchange_code_for_token(code)
    if not token_data or not token_data.get("access_token"):
        return _landing_redirect("token_exchange_failed")

    user_info = await SSOService.fetch_user_info(token_data["access_token"])
    if not user_info:
        return _landing_redirect("user_info_failed")

    email = (user_info.get("email") or "").lower()
    if not email:
        return _landing_redirect("no_email")

    if not email_allowed(email, config.ALLOWED_EMAIL_DOMAIN):
        logger.warning("Sign-in refused for %s: outside %s", email, config.ALLOWED_EMAIL_DOMAIN)
        return _landing_redirect("email_domain_not_allowed")

    user = find_or_create_user(db, email, user_info.get("name"))

    response = RedirectResponse(url=f"{config.FRONTEND_URL}/home", status_code=status.HTTP_302_FOUND)
    _set_session_cookies(response, create_access_token(user.email, user.id), create_refresh_token(user.id))
    response.delete_cookie(key=OAUTH_STATE_COOKIE)
    logger.info("User %s signed in", email)
    return response


@router.get("/session", response_model=SessionResponse)
async def get_session(current_user: Optional[dict] = Depends(get_current_session)):
    if current_user is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(
        authenticated=True,
        user=UserResponse(
            id=current_user["user_id"],
            email=current_user["email"],
            full_name=current_user["full_name"],
        ),
    )


@router.get("/me", response_model=UserResponse)
async def get_info(current_user: dict = Depends(get_current_user_jwt)):
    return {
        "id": current_user["user_id"],
        "email": current_user["email"],
        "full_name": current_user["full_name"],
    }


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_200_OK)
async def refresh_access_token(
    response: Response,
    payload: dict = Depends(verify_refresh_token),
    db: Session = Depends(get_db),
):
    if is_blacklisted(payload["raw"]):
        raise HTTPException(status_code=401, detail="Refresh token revoked")

    user = db.query(User).filter(User.id == payload["id"]).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=create_access_token(user.email, user.id),
        httponly=True,
        samesite="lax",
        secure=config.COOKIE_SECURE,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return RefreshResponse()


@router.post("/logout", response_model=LogoutResponse, status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    access_token: Optional[str] = Depends(optional_session_bearer),
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
):
    # Revoke both tokens for the rest of their lifetime
    for token in (access_token, refresh_token):
        if token:
            remaining_time = token_remaining_seconds(token)
            if remaining_time > 0:
                add_to_blacklist(token, remaining_time)

    response.delete_cookie(key=ACCESS_TOKEN_COOKIE)
    response.delete_cookie(key=REFRESH_TOKEN_COOKIE)
    return LogoutResponse()
