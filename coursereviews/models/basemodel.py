from datetime import datetime, timezone

from sqlalchemy import Column, TIMESTAMP, func

from coursereviews.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    __abstract__ = True

    created_at = Column(TIMESTAMP(timezone=True), nullable=False,
                        default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False,
                        default=utcnow, onupdate=utcnow, server_default=func.now())
