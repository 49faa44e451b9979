"""Course listing and mutation.

Known authorization gap: ``update_course`` and ``delete_course`` require an
authenticated caller but do not check that the caller owns the course, so
any account can change or remove any other account's course. This matches
the behavior the API has always had and is kept until ownership rules are
decided; non-owner mutations are logged at WARNING so they can be audited.
"""
from typing import Any, Dict, List, Optional

from app.persistence.gateway import CourseRecord, PersistenceGateway, UserRecord
from app.utils.exceptions import NotFoundError, ValidationError
from app.utils.logger import get_logger
from app.utils.validation import validate_course_changes, validate_new_course

logger = get_logger("courses")

COURSE = "Course"


class CourseService:
    """Operations over courses; ownership is always bound to the principal."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    def list_courses(self) -> List[CourseRecord]:
        return self.gateway.list_courses()

    def get_course(self, course_id: int) -> CourseRecord:
        course = self.gateway.find_course_by_id(course_id)
        if not course:
            raise NotFoundError(COURSE)
        return course

    def create_course(
        self,
        principal: UserRecord,
        title: Optional[str],
        description: Optional[str],
        estimated_time: Optional[str] = None,
        materials_needed: Optional[str] = None,
    ) -> CourseRecord:
        """
        Create a course owned by ``principal``.

        There is deliberately no owner argument: whatever owner the client
        sent is never consulted.

        Raises:
            ValidationError: If title or description is missing
        """
        errors = validate_new_course(title, description)
        if errors:
            raise ValidationError(errors)

        course = self.gateway.create_course(
            title=title,
            description=description,
            user_id=principal.id,
            estimated_time=estimated_time,
            materials_needed=materials_needed,
        )
        logger.info(f"User {principal.id} created course {course.id}")
        return course

    def update_course(self, principal: UserRecord, course_id: int, changes: Dict[str, Any]) -> None:
        """
        Apply title/description changes to a course.

        Only keys present in ``changes`` are written; every other column,
        including the owner, is left as is.

        Raises:
            NotFoundError: If no course has this id
            ValidationError: If a supplied field is empty
        """
        course = self.get_course(course_id)

        errors = validate_course_changes(changes)
        if errors:
            raise ValidationError(errors)

        self._warn_if_not_owner(principal, course, "updated")
        fields = {name: value for name, value in changes.items() if name in ("title", "description")}
        if fields:
            self.gateway.update_course(course_id, fields)

    def delete_course(self, principal: UserRecord, course_id: int) -> None:
        """
        Remove a course.

        Raises:
            NotFoundError: If no course has this id
        """
        course = self.get_course(course_id)
        self._warn_if_not_owner(principal, course, "deleted")
        self.gateway.delete_course(course_id)

    @staticmethod
    def _warn_if_not_owner(principal: UserRecord, course: CourseRecord, action: str) -> None:
        # Logged only; see the module docstring on the authorization gap
        if course.user_id != principal.id:
            logger.warning(
                f"Course {course.id} owned by user {course.user_id} {action} by non-owner user {principal.id}"
            )
