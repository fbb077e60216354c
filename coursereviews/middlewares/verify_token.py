from fastapi import Cookie, HTTPException
from jose import JWTError, jwt

from coursereviews.config import config

REFRESH_TOKEN_COOKIE = "refresh_token"


def verify_refresh_token(refresh_token: str = Cookie(None, alias=REFRESH_TOKEN_COOKIE)):
    if refresh_token is None or not refresh_token.strip():
        raise HTTPException(status_code=401, detail="Refresh token missing or invalid")

    try:
        payload = jwt.decode(refresh_token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Refresh token expired")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    if payload.get("token_type") != "refresh_token" or not payload.get("id"):
        raise HTTPException(status_code=401, detail="Invalid refresh token payload")
    payload["raw"] = refresh_token
    return payload
