"""Models package."""
from app.models.user import User
from app.models.course import Course

__all__ = ["User", "Course"]
