"""
Google OAuth2 sign-in restricted to the university's email domain.
"""
import logging
import secrets
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from coursereviews.config import config

logger = logging.getLogger("coursereviews")

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


class SSOService:
    """Service for handling the Google sign-in flow"""

    @staticmethod
    def generate_state_param() -> str:
        return secrets.token_urlsafe(16)

    @classmethod
    def build_google_authorization_url(
        cls,
        state: str,
        client_id: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        hosted_domain: Optional[str] = None,
        scope: str = "openid email profile",
    ) -> str:
        """Build Google OAuth2 authorization URL"""
        params = {
            "client_id": client_id or config.GOOGLE_CLIENT_ID,
            "redirect_uri": redirect_uri or config.GOOGLE_REDIRECT_URI,
            "response_type": "code",
            "scope": scope,
            "state": state,
            # hd only pre-filters the account chooser; the callback re-checks the domain
            "hd": hosted_domain or config.ALLOWED_EMAIL_DOMAIN,
            "prompt": "select_account",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    @classmethod
    async def exchange_code_for_token(
        cls,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Exchange authorization code for access token"""
        async with httpx.AsyncClient() as client:
            data = {
                "grant_type": "authorization_code",
                "client_id": config.GOOGLE_CLIENT_ID,
                "client_secret": config.GOOGLE_CLIENT_SECRET,
                "code": code,
                "redirect_uri": redirect_uri or config.GOOGLE_REDIRECT_URI,
            }

            try:
                response = await client.post(GOOGLE_TOKEN_URL, data=data)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as e:
                logger.error("Token exchange failed: %s", e)
                return None

    @classmethod
    async def fetch_user_info(cls, access_token: str) -> Optional[Dict[str, Any]]:
        """Fetch user info from Google"""
        async with httpx.AsyncClient() as client:
            headers = {"Authorization": f"Bearer {access_token}"}

            try:
                response = await client.get(GOOGLE_USERINFO_URL, headers=headers)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as e:
                logger.error("User info fetch failed: %s", e)
                return None
