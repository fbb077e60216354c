import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette import status

from coursereviews.database import get_db
from coursereviews.models import Course, Review
from coursereviews.oauth2 import get_current_user_jwt
from coursereviews.schemas.course import (
    BrowseResponse,
    CourseInfo,
    CourseResponse,
    CourseReview,
    SortToggleRequest,
)
from coursereviews.services import browse
from coursereviews.services.browse import BrowseViewState, SortKey, SortOrder
from coursereviews.services.handouts import handout_url
from coursereviews.services.review_display import course_stats, detail_fields, preview_text

logger = logging.getLogger("coursereviews")

router = APIRouter(prefix="/courses", tags=["courses"])


def _load_course_infos(db: Session) -> list:
    """All courses with their review counts, in catalog order."""
    try:
        courses = db.query(Course).order_by(Course.course_code).all()
        counts = browse.count_reviews(code for (code,) in db.query(Review.course_code).all())
    except SQLAlchemyError as e:
        logger.error("Loading courses failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Error loading courses: {e}")

    return [
        CourseInfo(
            course_code=course.course_code,
            course_name=course.course_name,
            prof=course.prof,
            nickname=course.nickname,
            course_dept=course.course_dept,
            count=counts.get(course.course_code, 0),
        )
        for course in courses
    ]


def _browse_response(courses: list, view: BrowseViewState) -> BrowseResponse:
    result = browse.derive_course_list(courses, view)
    return BrowseResponse(
        view=view,
        departments=browse.departments(courses),
        sort_arrows={
            "course_name": browse.sort_arrow(view, "course_name"),
            "prof": browse.sort_arrow(view, "prof"),
        },
        courses=result,
        total=len(result),
    )


@router.get("", response_model=BrowseResponse, status_code=status.HTTP_200_OK)
async def browse_courses(
    search: str = "",
    sort_key: SortKey = "course_name",
    sort_order: SortOrder = "asc",
    department: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    view = BrowseViewState(
        search=search,
        sort_key=sort_key,
        sort_order=sort_order,
        department=department or None,
    )
    return _browse_response(_load_course_infos(db), view)


@router.post("/sort", response_model=BrowseResponse, status_code=status.HTTP_200_OK)
async def toggle_sort(
    request: SortToggleRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    view = browse.toggle_sort(request.view, request.key)
    return _browse_response(_load_course_infos(db), view)


@router.get("/{course_code}", response_model=CourseResponse, status_code=status.HTTP_200_OK)
async def get_course(
    course_code: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    try:
        course = db.query(Course).filter(Course.course_code == course_code).first()
        reviews = (
            db.query(Review)
            .filter(Review.course_code == course_code)
            .order_by(Review.created_at.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Loading course %s failed: %s", course_code, e)
        raise HTTPException(status_code=500, detail=f"Error loading course: {e}")

    if not course:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Course not found"
        )

    return CourseResponse(
        course_code=course.course_code,
        course_name=course.course_name,
        prof=course.prof,
        info=course.info,
        stats=course_stats(course),
        handout_url=handout_url(course.course_handout),
        review_count=len(reviews),
        reviews=[
            CourseReview(
                number=index,
                taken_in=review.taken_in,
                your_grade=review.your_grade,
                av_plus=review.av_plus,
                preview=preview_text(review),
                details=detail_fields(review),
            )
            for index, review in enumerate(reviews, start=1)
        ],
        submit_review_href="/submit-review?"
        + urlencode({"from": "course", "course_code": course.course_code}),
    )
