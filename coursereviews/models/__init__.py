from coursereviews.database import Base

from .bookmark import Bookmark
from .course import Course
from .review import Review, EDITABLE_FIELDS
from .user import User
