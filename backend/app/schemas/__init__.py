"""Pydantic schemas for request/response validation."""
from app.schemas.user import UserCreateRequest, UserResponse
from app.schemas.course import CourseCreateRequest, CourseUpdateRequest, CourseResponse

__all__ = [
    "UserCreateRequest",
    "UserResponse",
    "CourseCreateRequest",
    "CourseUpdateRequest",
    "CourseResponse",
]
