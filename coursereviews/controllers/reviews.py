"""
Review submission and the profile screen's own-review management.

Every query that touches an existing review is scoped to the caller's
user_id, so one student can never read, edit or delete another's review.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette import status

from coursereviews.database import get_db
from coursereviews.models import Course, Review
from coursereviews.oauth2 import get_current_user_jwt
from coursereviews.schemas.review import (
    CourseSuggestion,
    MyReviewsResponse,
    ReviewCreate,
    ReviewEditForm,
    ReviewResponse,
    ReviewSubmitted,
    ReviewUpdate,
    SubmitScreen,
    SuggestionField,
)
from coursereviews.services import autocomplete
from coursereviews.services.navigation import after_submit_redirect, back_link

logger = logging.getLogger("coursereviews")

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _my_reviews(db: Session, user_id: str) -> List[Review]:
    return (
        db.query(Review)
        .filter(Review.user_id == user_id)
        .order_by(Review.created_at.desc())
        .all()
    )


def _get_own_review(db: Session, review_id: str, user_id: str) -> Review:
    review = (
        db.query(Review)
        .filter(Review.review_id == review_id, Review.user_id == user_id)
        .first()
    )
    if not review:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Review not found"
        )
    return review


@router.get("/submit", response_model=SubmitScreen)
async def submit_screen(
    origin: Optional[str] = Query(None, alias="from"),
    course_code: Optional[str] = None,
    current_user: dict = Depends(get_current_user_jwt),
):
    return SubmitScreen(back=back_link(origin, course_code))


@router.get("/suggestions", response_model=List[CourseSuggestion])
async def course_suggestions(
    field: SuggestionField,
    q: str = "",
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    """Autocomplete for the course code / course name inputs."""
    courses = (
        db.query(Course.course_code, Course.course_name, Course.nickname)
        .order_by(Course.course_code)
        .all()
    )
    courses = [CourseSuggestion.model_validate(c) for c in courses]

    state = autocomplete.CourseFieldsState()
    if field == "code":
        state = autocomplete.type_code(state, q)
    else:
        state = autocomplete.type_name(state, q)
    return autocomplete.visible_suggestions(courses, state)


@router.post("", response_model=ReviewSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_review(
    create_review_request: ReviewCreate,
    origin: Optional[str] = Query(None, alias="from"),
    course_code: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    # The course code is not checked against the catalog
    review = Review(
        **create_review_request.model_dump(),
        user_id=current_user.get("user_id"),
    )

    db.add(review)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Creating review failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Error creating review: {e}")
    db.refresh(review)

    logger.info("Review %s submitted for %s", review.review_id, review.course_code)
    return ReviewSubmitted(
        review=ReviewResponse.model_validate(review),
        redirect_to=after_submit_redirect(origin, course_code),
    )


@router.get("/mine", response_model=MyReviewsResponse)
async def get_my_reviews(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    try:
        reviews = _my_reviews(db, current_user["user_id"])
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"Error loading reviews: {e}")
    return MyReviewsResponse(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        total=len(reviews),
    )


@router.get("/{review_id}/edit", response_model=ReviewEditForm)
async def get_edit_form(
    review_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    review = _get_own_review(db, review_id, current_user["user_id"])
    return ReviewEditForm.from_review(review)


@router.patch("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    update_review_request: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    review = _get_own_review(db, review_id, current_user["user_id"])

    update_data = update_review_request.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(review, key, value)

    try:
        db.commit()
        db.refresh(review)
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating review: {e}",
        )
    logger.info("Review %s updated (%s)", review_id, ", ".join(sorted(update_data)))
    return ReviewResponse.model_validate(review)


@router.delete("/{review_id}", response_model=MyReviewsResponse)
async def delete_review(
    review_id: str,
    confirm: bool = False,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user_jwt),
):
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deleting a review must be confirmed",
        )

    review = _get_own_review(db, review_id, current_user["user_id"])
    try:
        db.delete(review)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting review: {e}",
        )
    logger.info("Review %s deleted", review_id)

    # Only reached once the delete is committed
    reviews = _my_reviews(db, current_user["user_id"])
    return MyReviewsResponse(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        total=len(reviews),
    )
