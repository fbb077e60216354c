from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coursereviews.models.review import EDITABLE_FIELDS
from coursereviews.services.navigation import BackLink

GRADES = ("A", "A-", "B", "B-", "C", "C-", "D", "E", "NC")


class ReviewFields(BaseModel):
    taken_in: Optional[str] = None
    your_grade: Optional[str] = None
    av_plus: Optional[str] = None
    gr_comm: Optional[str] = None
    evals: Optional[str] = None
    open_book: Optional[str] = None
    attendance: Optional[str] = None
    slides: Optional[str] = None
    pr_no: Optional[str] = None
    rec: Optional[str] = None
    not_rec: Optional[str] = None
    advice: Optional[str] = None
    comments: Optional[str] = None

    @field_validator("your_grade")
    def validate_grade(cls, v):
        if v in (None, ""):
            return v
        if v not in GRADES:
            raise ValueError(f"Grade must be one of {', '.join(GRADES)}")
        return v


class ReviewCreate(ReviewFields):
    course_code: str = Field(min_length=1)
    course_name: Optional[str] = None

    @field_validator("course_code")
    def strip_course_code(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Course code is required")
        return v


class ReviewUpdate(ReviewFields):
    """Only the editable fields; anything else in the body is ignored."""


class ReviewEditForm(BaseModel):
    review_id: str
    course_code: str
    course_name: Optional[str] = None
    form: dict

    @classmethod
    def from_review(cls, review) -> "ReviewEditForm":
        return cls(
            review_id=review.review_id,
            course_code=review.course_code,
            course_name=review.course_name,
            form={field: getattr(review, field) or "" for field in EDITABLE_FIELDS},
        )


class ReviewResponse(ReviewFields):
    review_id: str
    course_code: str
    course_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReviewSubmitted(BaseModel):
    review: ReviewResponse
    redirect_to: str


class MyReviewsResponse(BaseModel):
    reviews: List[ReviewResponse]
    total: int


class CourseSuggestion(BaseModel):
    course_code: str
    course_name: str
    nickname: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SubmitScreen(BaseModel):
    back: BackLink
    grades: List[str] = list(GRADES)
    fields: List[str] = list(EDITABLE_FIELDS)


SuggestionField = Literal["code", "name"]
