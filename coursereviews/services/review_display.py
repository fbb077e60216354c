from typing import Dict, List, Optional

# Labels for the detailed review view, in display order
REVIEW_FIELD_LABELS: Dict[str, str] = {
    "taken_in": "Taken in",
    "your_grade": "Grade received",
    "av_plus": "Total marks received",
    "gr_comm": "Comments on grading",
    "evals": "Evaluative components",
    "open_book": "Evaluation type",
    "attendance": "Attendance expectations",
    "slides": "Course material & slides",
    "pr_no": "PR No.",
    "rec": "What worked well (why you would recommend)",
    "not_rec": "Things to keep in mind (why you would not recommend)",
    "advice": "Advice from the reviewer",
    "comments": "Additional comments",
}

PREVIEW_FIELDS = ("rec", "not_rec", "comments", "advice", "gr_comm")


def _value(review, field: str) -> Optional[str]:
    if isinstance(review, dict):
        return review.get(field)
    return getattr(review, field, None)


def preview_text(review) -> str:
    for field in PREVIEW_FIELDS:
        value = (_value(review, field) or "").strip()
        if value:
            return value
    return "-"


def detail_fields(review) -> List[Dict[str, str]]:
    """Labelled fields for the detailed view; blank answers are left out."""
    fields = []
    for key, label in REVIEW_FIELD_LABELS.items():
        value = _value(review, key)
        if not value or not value.strip():
            continue
        fields.append({"field": key, "label": label, "value": value})
    return fields


def course_stats(course) -> List[Dict[str, Optional[str]]]:
    return [
        {"label": "Average Marks", "value": _value(course, "av_marks")},
        {"label": "Course Total", "value": _value(course, "course_total")},
        {"label": "Average Grade", "value": _value(course, "av_grade")},
    ]
