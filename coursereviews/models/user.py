import uuid

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coursereviews.models.basemodel import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)

    reviews = relationship("Review", back_populates="author")
    bookmarks = relationship(
        "Bookmark", back_populates="user", cascade="all, delete-orphan"
    )
