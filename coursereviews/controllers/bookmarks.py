import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from starlette import status

from coursereviews.database import get_db
from coursereviews.models import Bookmark, Course
from coursereviews.oauth2 import get_current_user_jwt
from coursereviews.schemas.bookmark import (
    BookmarkAdded,
    BookmarkCreate,
    BookmarkedCourse,
    BookmarksResponse,
)
from coursereviews.services.navigation import back_link

logger = logging.getLogger("coursereviews")

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


def _bookmarked_courses(db: Session, user_id: str) -> list:
    courses = (
        db.query(Course)
        .join(Bookmark, Bookmark.course_code == Course.course_code)
        .filter(Bookmark.user_id == user_id)
        .order_by(Bookmark.created_at)
        .all()
    )
    return [BookmarkedCourse.model_validate(c) for c in courses]


@router.get("", response_model=BookmarksResponse)
async def get_bookmarks(
    origin: Optional[str] = Query(None, alias="from"),
    course_code: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    try:
        courses = _bookmarked_courses(db, current_user["user_id"])
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"Error loading bookmarks: {e}")
    return BookmarksResponse(back=back_link(origin, course_code), courses=courses)


@router.post("", response_model=BookmarkAdded, status_code=status.HTTP_201_CREATED)
async def add_bookmark(
    bookmark_request: BookmarkCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    course = (
        db.query(Course)
        .filter(Course.course_code == bookmark_request.course_code)
        .first()
    )
    if not course:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Course not found"
        )

    db.add(Bookmark(user_id=current_user["user_id"], course_code=course.course_code))
    try:
        db.commit()
    except IntegrityError:
        # (user_id, course_code) is the primary key
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Already bookmarked"
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Bookmarking %s failed: %s", course.course_code, e)
        raise HTTPException(status_code=500, detail=f"Error adding bookmark: {e}")

    return BookmarkAdded(course_code=course.course_code)


@router.delete("/{course_code}", response_model=BookmarksResponse)
async def remove_bookmark(
    course_code: str,
    origin: Optional[str] = Query(None, alias="from"),
    origin_course_code: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    try:
        removed = (
            db.query(Bookmark)
            .filter(
                Bookmark.user_id == current_user["user_id"],
                Bookmark.course_code == course_code,
            )
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error removing bookmark: {e}",
        )

    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Bookmark not found"
        )

    # The list is rebuilt only after the delete is committed
    return BookmarksResponse(
        back=back_link(origin, origin_course_code),
        courses=_bookmarked_courses(db, current_user["user_id"]),
    )
