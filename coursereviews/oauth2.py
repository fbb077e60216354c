from datetime import timezone, datetime, timedelta
from typing import Optional

from fastapi import Depends
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from coursereviews.config import config
from coursereviews.database import get_db
from coursereviews.exceptions import NotAuthenticated
from coursereviews.models import User
from coursereviews.security.json_bearer import SessionTokenBearer
from coursereviews.services.token_blacklist import is_blacklisted

session_bearer = SessionTokenBearer(
    scheme_name="Session",
    description="Session token issued by /auth/callback",
    auto_error=True,
)
optional_session_bearer = SessionTokenBearer(scheme_name="Session", auto_error=False)

SECRET_KEY = config.SECRET_KEY
ALGORITHM = config.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = config.ACCESS_TOKEN_EXPIRE_MINUTES
REFRESH_TOKEN_EXPIRE_DAYS = config.REFRESH_TOKEN_EXPIRE_DAYS


### Create a JWT token for user ###
def create_access_token(email: str, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    encode = {
        "sub": email,
        "id": user_id,
        "token_type": "access_token",
    }
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    encode.update({"exp": expire})
    return jwt.encode(encode, SECRET_KEY, algorithm=ALGORITHM)


def create_refresh_token(user_id: str) -> str:
    encode = {"id": user_id, "token_type": "refresh_token"}
    expire = datetime.now(timezone.utc) + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    encode.update({"exp": expire})
    return jwt.encode(encode, SECRET_KEY, algorithm=ALGORITHM)


def token_remaining_seconds(token: str) -> int:
    """Seconds until the token expires, 0 if it is already unusable."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return 0
    exp = payload.get("exp")
    if not exp:
        return 0
    return max(int(exp - datetime.now(timezone.utc).timestamp()), 0)


def _resolve_user(token: str, db: Session) -> dict:
    if is_blacklisted(token):
        raise NotAuthenticated("Session has been revoked")

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise NotAuthenticated("Could not validate credentials")

    email: str = payload.get("sub")
    user_id: str = payload.get("id")
    if email is None or user_id is None or payload.get("token_type") != "access_token":
        raise NotAuthenticated("Could not validate credentials")

    user = db.query(User).filter(User.id == user_id, User.email == email).first()
    if user is None or not user.is_active:
        raise NotAuthenticated("Could not validate credentials")
    return {
        "user_id": user.id,
        "email": user.email,
        "full_name": user.full_name,
    }


### Session guard: every authenticated screen depends on this ###
async def get_current_user_jwt(token: str = Depends(session_bearer), db: Session = Depends(get_db)):
    return _resolve_user(token, db)


async def get_current_session(
    token: Optional[str] = Depends(optional_session_bearer), db: Session = Depends(get_db)
) -> Optional[dict]:
    if not token:
        return None
    try:
        return _resolve_user(token, db)
    except NotAuthenticated:
        return None
