from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel


class BackLink(BaseModel):
    href: str
    label: str


def course_path(course_code: str) -> str:
    return f"/course/{quote(course_code, safe='')}"


def back_link(origin: Optional[str], course_code: Optional[str] = None) -> BackLink:
    """Where "back" leads from a sub-screen opened with ?from=...&course_code=..."""
    if origin == "course" and course_code:
        return BackLink(href=course_path(course_code), label="Back to Reviews")
    if origin == "profile":
        return BackLink(href="/profile", label="Back to Profile")
    return BackLink(href="/home", label="Back to Home")


def after_submit_redirect(origin: Optional[str], course_code: Optional[str] = None) -> str:
    return back_link(origin, course_code).href
