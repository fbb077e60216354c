import logging
from logging.config import dictConfig

from fastapi import FastAPI

from coursereviews.config import LogConfig
from coursereviews.controllers import auth, bookmarks, courses, reviews
from coursereviews.database import Base, SessionLocal, engine
from coursereviews.exceptions import NotAuthenticated, not_authenticated_handler
from coursereviews.middlewares.cors import setup_cors
from coursereviews.utils import load_course_catalog

dictConfig(LogConfig().model_dump())
logger = logging.getLogger("coursereviews")

app = FastAPI(title="Course Reviews")

setup_cors(app)
app.add_exception_handler(NotAuthenticated, not_authenticated_handler)
Base.metadata.create_all(bind=engine)
app.include_router(auth.router)
app.include_router(courses.router)
app.include_router(reviews.router)
app.include_router(bookmarks.router)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    """Seed the course catalog on startup"""
    db = SessionLocal()
    try:
        load_course_catalog(db)
    finally:
        db.close()
