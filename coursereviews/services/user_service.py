import logging
from typing import Optional

from sqlalchemy.orm import Session

from coursereviews.models import User

logger = logging.getLogger("coursereviews")


def email_allowed(email: str, domain: str) -> bool:
    return email.lower().endswith(f"@{domain.lower()}")


def find_or_create_user(db: Session, email: str, full_name: Optional[str] = None) -> User:
    email = email.lower()
    user = db.query(User).filter(User.email == email).first()
    if user:
        if full_name and not user.full_name:
            user.full_name = full_name
            db.commit()
        return user

    user = User(email=email, full_name=full_name, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s on first sign-in", email)
    return user
