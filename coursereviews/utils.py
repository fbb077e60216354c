import json
import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursereviews.config import config
from coursereviews.models import Course

logger = logging.getLogger("coursereviews")

CATALOG_FIELDS = (
    "course_code",
    "course_name",
    "prof",
    "nickname",
    "course_dept",
    "info",
    "av_marks",
    "course_total",
    "av_grade",
    "course_handout",
)


def read_catalog(path: Path) -> List[dict]:
    with open(path, encoding="utf-8") as f:
        entries = json.load(f)
    if not isinstance(entries, list):
        raise ValueError(f"{path} must contain a JSON list of courses")
    return [{k: entry.get(k) for k in CATALOG_FIELDS} for entry in entries]


def load_course_catalog(db: Session, path: Optional[str] = None) -> int:
    """
    Insert catalog courses that are not in the database yet.
    Existing rows are left untouched.

    Returns:
        The number of courses inserted
    """
    path = path or config.COURSE_CATALOG_FILE
    if not path:
        return 0

    catalog_path = Path(path)
    if not catalog_path.exists():
        logger.warning("Course catalog %s not found, skipping seed.", catalog_path)
        return 0

    existing = {code for (code,) in db.query(Course.course_code).all()}
    inserted = 0
    for entry in read_catalog(catalog_path):
        code = (entry.get("course_code") or "").strip()
        if not code or not entry.get("course_name") or code in existing:
            continue
        entry["course_code"] = code
        db.add(Course(**entry))
        existing.add(code)
        inserted += 1

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error seeding course catalog: %s", e)
        raise
    logger.info("Seeded %d courses from %s", inserted, catalog_path)
    return inserted
