"""Persistence gateway interface and the plain records it returns.

Handlers only talk to storage through ``PersistenceGateway``. Records are
detached dataclasses, so nothing above this layer holds ORM state.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class UserRecord:
    """A stored account. ``password_hash`` never leaves the service."""
    id: int
    first_name: str
    last_name: str
    email_address: str
    password_hash: str = field(repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class OwnerSummary:
    """Public fields of a course owner."""
    id: int
    first_name: str
    last_name: str
    email_address: str


@dataclass(frozen=True)
class CourseRecord:
    """A stored course joined with its owner's public fields."""
    id: int
    user_id: int
    title: str
    description: str
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None
    owner: Optional[OwnerSummary] = None


class PersistenceGateway(ABC):
    """Read/write access to users and courses."""

    @abstractmethod
    def create_user(
        self,
        first_name: str,
        last_name: str,
        email_address: str,
        password_hash: str,
    ) -> UserRecord:
        """Insert a user; raises UniqueConstraintError on a duplicate email."""

    @abstractmethod
    def find_user_by_email(self, email_address: str) -> Optional[UserRecord]:
        """Find a user by exact email address."""

    @abstractmethod
    def create_course(
        self,
        title: str,
        description: str,
        user_id: int,
        estimated_time: Optional[str] = None,
        materials_needed: Optional[str] = None,
    ) -> CourseRecord:
        """Insert a course owned by ``user_id``."""

    @abstractmethod
    def find_course_by_id(self, course_id: int) -> Optional[CourseRecord]:
        """Find one course, with its owner joined."""

    @abstractmethod
    def list_courses(self) -> List[CourseRecord]:
        """List every course, each with its owner joined."""

    @abstractmethod
    def update_course(self, course_id: int, fields: Dict[str, Any]) -> None:
        """Apply ``fields`` to a course; raises NotFoundError if it is gone."""

    @abstractmethod
    def delete_course(self, course_id: int) -> None:
        """Delete a course; raises NotFoundError if it is gone."""
