"""Schemas for course endpoints."""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from app.persistence.gateway import CourseRecord
from app.schemas.user import UserResponse

# Fields a client may change through PUT /courses/{id}
UPDATABLE_FIELDS = frozenset({"title", "description"})


class CourseCreateRequest(BaseModel):
    """Request schema for POST /courses. Unknown keys such as userId are dropped."""
    title: Optional[str] = None
    description: Optional[str] = None
    estimatedTime: Optional[str] = None
    materialsNeeded: Optional[str] = None


class CourseUpdateRequest(BaseModel):
    """Request schema for PUT /courses/{id}."""
    title: Optional[str] = None
    description: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        return {name: getattr(self, name) for name in self.model_fields_set & UPDATABLE_FIELDS}


class CourseResponse(BaseModel):
    """Course with its owner's public fields."""
    id: int
    title: str
    description: str
    estimatedTime: Optional[str] = None
    materialsNeeded: Optional[str] = None
    userId: int
    owner: Optional[UserResponse] = Field(None, description="Owning account")

    @classmethod
    def from_record(cls, record: CourseRecord) -> "CourseResponse":
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            estimatedTime=record.estimated_time,
            materialsNeeded=record.materials_needed,
            userId=record.user_id,
            owner=UserResponse.from_record(record.owner) if record.owner else None,
        )
