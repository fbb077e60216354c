from sqlalchemy import Column, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coursereviews.models.basemodel import BaseModel


class Course(BaseModel):
    __tablename__ = "courses"

    course_code: Mapped[str] = mapped_column(String(32), primary_key=True, index=True)
    course_name = Column(String, nullable=False)
    prof = Column(String, nullable=True)
    nickname = Column(String, nullable=True)
    course_dept = Column(String, nullable=True, index=True)
    info = Column(Text, nullable=True)
    av_marks = Column(String, nullable=True)
    course_total = Column(String, nullable=True)
    av_grade = Column(String, nullable=True)
    course_handout = Column(String, nullable=True)  # absolute URL or S3 key

    bookmarks = relationship(
        "Bookmark", back_populates="course", cascade="all, delete-orphan"
    )
