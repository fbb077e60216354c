import uuid

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coursereviews.models.basemodel import BaseModel

# Fields the author fills in and may later edit, in form order
EDITABLE_FIELDS = (
    "taken_in",
    "your_grade",
    "av_plus",
    "gr_comm",
    "evals",
    "open_book",
    "attendance",
    "slides",
    "pr_no",
    "rec",
    "not_rec",
    "advice",
    "comments",
)


class Review(BaseModel):
    __tablename__ = "reviews"

    review_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Not a foreign key: reviews may name a course missing from the catalog
    course_code: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    course_name = Column(String, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )

    taken_in = Column(String, nullable=True)
    your_grade = Column(String(4), nullable=True)
    av_plus = Column(String, nullable=True)
    gr_comm = Column(Text, nullable=True)
    evals = Column(Text, nullable=True)
    open_book = Column(String, nullable=True)
    attendance = Column(Text, nullable=True)
    slides = Column(Text, nullable=True)
    pr_no = Column(String, nullable=True)
    rec = Column(Text, nullable=True)
    not_rec = Column(Text, nullable=True)
    advice = Column(Text, nullable=True)
    comments = Column(Text, nullable=True)

    author = relationship("User", back_populates="reviews")
