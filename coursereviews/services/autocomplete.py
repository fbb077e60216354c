from typing import List, Literal, Optional

from pydantic import BaseModel

ActiveField = Literal["code", "name"]

MAX_SUGGESTIONS = 8


class CourseFieldsState(BaseModel):
    """Course code / course name inputs of the submit-review form."""

    course_code: str = ""
    course_name: str = ""
    active_field: Optional[ActiveField] = None
    show_suggestions: bool = False


def _value(course, field: str) -> Optional[str]:
    if isinstance(course, dict):
        return course.get(field)
    return getattr(course, field, None)


def type_code(state: CourseFieldsState, value: str) -> CourseFieldsState:
    return state.model_copy(
        update={"course_code": value, "active_field": "code", "show_suggestions": True}
    )


def type_name(state: CourseFieldsState, value: str) -> CourseFieldsState:
    return state.model_copy(
        update={"course_name": value, "active_field": "name", "show_suggestions": True}
    )


def visible_suggestions(courses: List, state: CourseFieldsState) -> List:
    """What the dropdown actually shows: nothing while closed, at most eight rows."""
    if not state.show_suggestions:
        return []
    return suggestions(courses, state)[:MAX_SUGGESTIONS]


def suggestions(courses: List, state: CourseFieldsState) -> List:
    if not state.active_field:
        return []

    if state.active_field == "code":
        q = state.course_code.lower()
        return [c for c in courses if q in (_value(c, "course_code") or "").lower()]

    q = state.course_name.lower()
    return [
        c
        for c in courses
        if q in (_value(c, "course_name") or "").lower()
        or q in (_value(c, "nickname") or "").lower()
    ]


def select_suggestion(state: CourseFieldsState, course) -> CourseFieldsState:
    return state.model_copy(
        update={
            "course_code": _value(course, "course_code") or "",
            "course_name": _value(course, "course_name") or "",
            "show_suggestions": False,
            "active_field": None,
        }
    )


def click_outside(state: CourseFieldsState) -> CourseFieldsState:
    return state.model_copy(update={"show_suggestions": False, "active_field": None})
