"""Course API endpoints."""
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.deps import authenticated_body, get_course_service, get_current_user
from app.persistence.gateway import UserRecord
from app.schemas.course import CourseCreateRequest, CourseResponse, CourseUpdateRequest
from app.services.course_service import CourseService
from app.utils.exceptions import AppException, handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=List[CourseResponse])
def list_courses(service: CourseService = Depends(get_course_service)) -> List[CourseResponse]:
    """List every course with its owner."""
    try:
        return [CourseResponse.from_record(c) for c in service.list_courses()]
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Failed to list courses: {e}", exc_info=True)
        raise handle_database_error(e, "list_courses")


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(
    course_id: int,
    service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Get a single course with its owner.

    Args:
        course_id: The course ID
        service: Course service

    Returns:
        Course details
    """
    try:
        return CourseResponse.from_record(service.get_course(course_id))
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Failed to get course {course_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_course")


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_course(
    request: Request,
    payload: CourseCreateRequest = Depends(authenticated_body(CourseCreateRequest)),
    current_user: UserRecord = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> Response:
    """
    Create a course owned by the authenticated user.

    Responds 201 with a Location header pointing at the new course.
    """
    try:
        course = service.create_course(
            current_user,
            title=payload.title,
            description=payload.description,
            estimated_time=payload.estimatedTime,
            materials_needed=payload.materialsNeeded,
        )
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Failed to create course: {e}", exc_info=True)
        raise handle_database_error(e, "create_course")

    location = request.app.url_path_for("get_course", course_id=course.id)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": str(location)})


@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_course(
    course_id: int,
    payload: CourseUpdateRequest = Depends(authenticated_body(CourseUpdateRequest)),
    current_user: UserRecord = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> Response:
    """
    Update a course's title and/or description.

    Any authenticated user may update any course (no ownership check).
    """
    try:
        service.update_course(current_user, course_id, payload.changes())
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Failed to update course {course_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_course")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_course(
    course_id: int,
    current_user: UserRecord = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> Response:
    """
    Delete a course.

    Any authenticated user may delete any course (no ownership check).
    """
    try:
        service.delete_course(current_user, course_id)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete course {course_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_course")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
