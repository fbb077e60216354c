from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from coursereviews.services.navigation import BackLink


class BookmarkCreate(BaseModel):
    course_code: str = Field(min_length=1)


class BookmarkedCourse(BaseModel):
    course_code: str
    course_name: str
    prof: Optional[str] = None
    nickname: Optional[str] = None
    course_dept: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BookmarksResponse(BaseModel):
    back: BackLink
    courses: List[BookmarkedCourse]


class BookmarkAdded(BaseModel):
    course_code: str
    message: str = "Course bookmarked!"
