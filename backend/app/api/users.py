"""Account API endpoints."""
from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_current_user, get_user_service
from app.persistence.gateway import UserRecord
from app.schemas.user import UserCreateRequest, UserResponse
from app.services.user_service import UserService
from app.utils.exceptions import AppException, handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserResponse)
def get_authenticated_user(
    current_user: UserRecord = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Return the account behind the request's credentials.

    Args:
        current_user: Principal resolved from the Authorization header
        service: User service

    Returns:
        The account's public fields
    """
    return UserResponse.from_record(service.self_lookup(current_user))


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_user(
    payload: UserCreateRequest,
    service: UserService = Depends(get_user_service),
) -> Response:
    """
    Create a new account.

    Responds 201 with a Location header and no body.

    Args:
        payload: Account fields
        service: User service
    """
    try:
        service.create_account(
            first_name=payload.firstName,
            last_name=payload.lastName,
            email_address=payload.emailAddress,
            password=payload.password,
        )
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Failed to create user: {e}", exc_info=True)
        raise handle_database_error(e, "create_user")

    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})
