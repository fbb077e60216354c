"""
Derivation of the browse screen's course list.

Everything here is pure: the same courses and the same view state always
produce the same list, so the pipeline can be tested without a database.
"""

from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel

SortKey = Literal["course_name", "prof"]
SortOrder = Literal["asc", "desc"]

SEARCH_FIELDS = ("course_code", "course_name", "prof", "nickname")


class BrowseViewState(BaseModel):
    search: str = ""
    sort_key: SortKey = "course_name"
    sort_order: SortOrder = "asc"
    department: Optional[str] = None
    sort_open: bool = False
    filter_open: bool = False


def _value(course, field: str) -> Optional[str]:
    if isinstance(course, dict):
        return course.get(field)
    return getattr(course, field, None)


def count_reviews(course_codes: Iterable[str]) -> Dict[str, int]:
    """Count review rows per course code."""
    counts: Dict[str, int] = {}
    for code in course_codes:
        counts[code] = counts.get(code, 0) + 1
    return counts


def matches_search(course, term: str) -> bool:
    q = term.lower()
    for field in SEARCH_FIELDS:
        value = _value(course, field)
        if value and q in value.lower():
            return True
    return False


def derive_course_list(courses: List, state: BrowseViewState) -> List:
    """Apply search, then department filter, then a stable sort."""
    result = list(courses)

    if state.search.strip():
        result = [c for c in result if matches_search(c, state.search)]

    if state.department:
        result = [c for c in result if _value(c, "course_dept") == state.department]

    # sorted() is stable, so reverse=True keeps ties in their original order
    result = sorted(
        result,
        key=lambda c: (_value(c, state.sort_key) or "").lower(),
        reverse=state.sort_order == "desc",
    )
    return result


def departments(courses: List) -> List[str]:
    seen = []
    for course in courses:
        dept = _value(course, "course_dept")
        if dept and dept not in seen:
            seen.append(dept)
    return seen


def toggle_sort(state: BrowseViewState, key: SortKey) -> BrowseViewState:
    if state.sort_key == key:
        order = "desc" if state.sort_order == "asc" else "asc"
        return state.model_copy(update={"sort_order": order, "sort_open": False})
    return state.model_copy(
        update={"sort_key": key, "sort_order": "asc", "sort_open": False}
    )


def select_department(state: BrowseViewState, department: Optional[str]) -> BrowseViewState:
    return state.model_copy(update={"department": department})


def open_sort(state: BrowseViewState) -> BrowseViewState:
    return state.model_copy(update={"sort_open": not state.sort_open, "filter_open": False})


def open_filter(state: BrowseViewState) -> BrowseViewState:
    return state.model_copy(update={"filter_open": not state.filter_open, "sort_open": False})


def click_outside(state: BrowseViewState) -> BrowseViewState:
    """Any interaction outside the sort and filter menus closes both."""
    return state.model_copy(update={"sort_open": False, "filter_open": False})


def sort_arrow(state: BrowseViewState, key: SortKey) -> str:
    if state.sort_key != key:
        return ""
    return " ↑" if state.sort_order == "asc" else " ↓"
