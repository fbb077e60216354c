import sqlalchemy
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coursereviews.models.basemodel import BaseModel


class Bookmark(BaseModel):
    __tablename__ = "bookmarks"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    course_code: Mapped[str] = mapped_column(
        String(32), ForeignKey("courses.course_code", ondelete="CASCADE"), primary_key=True
    )

    ### Preventing Duplicate Bookmarks ###
    __table_args__ = (
        sqlalchemy.UniqueConstraint("user_id", "course_code", name="_user_course_bookmark_uc"),
    )

    user = relationship("User", back_populates="bookmarks")
    course = relationship("Course", back_populates="bookmarks")
