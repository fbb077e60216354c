from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from coursereviews.services.browse import BrowseViewState, SortKey


class CourseInfo(BaseModel):
    course_code: str
    course_name: str
    prof: Optional[str] = None
    nickname: Optional[str] = None
    course_dept: Optional[str] = None
    count: int = 0

    model_config = ConfigDict(from_attributes=True)


class BrowseResponse(BaseModel):
    view: BrowseViewState
    departments: List[str]
    sort_arrows: Dict[str, str]
    courses: List[CourseInfo]
    total: int


class SortToggleRequest(BaseModel):
    view: BrowseViewState = Field(default_factory=BrowseViewState)
    key: SortKey


class CourseStat(BaseModel):
    label: str
    value: Optional[str] = None


class ReviewField(BaseModel):
    field: str
    label: str
    value: str


class CourseReview(BaseModel):
    number: int
    taken_in: Optional[str] = None
    your_grade: Optional[str] = None
    av_plus: Optional[str] = None
    preview: str
    details: List[ReviewField]


class CourseResponse(BaseModel):
    course_code: str
    course_name: str
    prof: Optional[str] = None
    info: Optional[str] = None
    stats: List[CourseStat]
    handout_url: Optional[str] = None
    review_count: int
    reviews: List[CourseReview]
    submit_review_href: str
