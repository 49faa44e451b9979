"""SQLAlchemy implementation of the persistence gateway."""
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.models import Course, User
from app.persistence.gateway import (
    CourseRecord,
    OwnerSummary,
    PersistenceGateway,
    UserRecord,
)
from app.utils.exceptions import NotFoundError, UniqueConstraintError
from app.utils.logger import get_logger

logger = get_logger("persistence")

# Columns a course update may touch
UPDATABLE_COURSE_FIELDS = ("title", "description")


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message


def user_to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email_address=user.email_address,
        password_hash=user.password_hash,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def course_to_record(course: Course) -> CourseRecord:
    owner = None
    if course.owner is not None:
        owner = OwnerSummary(
            id=course.owner.id,
            first_name=course.owner.first_name,
            last_name=course.owner.last_name,
            email_address=course.owner.email_address,
        )
    return CourseRecord(
        id=course.id,
        user_id=course.user_id,
        title=course.title,
        description=course.description,
        estimated_time=course.estimated_time,
        materials_needed=course.materials_needed,
        owner=owner,
    )


class SqlAlchemyGateway(PersistenceGateway):
    """Gateway backed by a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(
        self,
        first_name: str,
        last_name: str,
        email_address: str,
        password_hash: str,
    ) -> UserRecord:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email_address=email_address,
            password_hash=password_hash,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_unique_violation(e):
                logger.info(f"Rejected duplicate email address: {email_address}")
                raise UniqueConstraintError()
            raise
        self.db.refresh(user)
        return user_to_record(user)

    def find_user_by_email(self, email_address: str) -> Optional[UserRecord]:
        user = self.db.query(User).filter(User.email_address == email_address).first()
        return user_to_record(user) if user else None

    def create_course(
        self,
        title: str,
        description: str,
        user_id: int,
        estimated_time: Optional[str] = None,
        materials_needed: Optional[str] = None,
    ) -> CourseRecord:
        course = Course(
            title=title,
            description=description,
            user_id=user_id,
            estimated_time=estimated_time,
            materials_needed=materials_needed,
        )
        self.db.add(course)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(course)
        return course_to_record(course)

    def find_course_by_id(self, course_id: int) -> Optional[CourseRecord]:
        course = (
            self.db.query(Course)
            .options(joinedload(Course.owner))
            .filter(Course.id == course_id)
            .first()
        )
        return course_to_record(course) if course else None

    def list_courses(self) -> List[CourseRecord]:
        courses = (
            self.db.query(Course)
            .options(joinedload(Course.owner))
            .order_by(Course.id.asc())
            .all()
        )
        return [course_to_record(c) for c in courses]

    def update_course(self, course_id: int, fields: Dict[str, Any]) -> None:
        course = self.db.query(Course).filter(Course.id == course_id).first()
        if not course:
            raise NotFoundError("Course")

        for name in UPDATABLE_COURSE_FIELDS:
            if name in fields:
                setattr(course, name, fields[name])

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_course(self, course_id: int) -> None:
        course = self.db.query(Course).filter(Course.id == course_id).first()
        if not course:
            raise NotFoundError("Course")

        self.db.delete(course)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
