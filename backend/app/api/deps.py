"""FastAPI dependency providers.

Components receive their collaborators through constructors; this module is
the only place that decides which implementations are used per request.
"""
import json
from typing import Awaitable, Callable, Optional, Type, TypeVar

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from app.auth.basic_auth import AuthenticationGate
from app.database import get_db
from app.persistence.gateway import PersistenceGateway, UserRecord
from app.persistence.sqlalchemy_gateway import SqlAlchemyGateway
from app.services.course_service import CourseService
from app.services.user_service import UserService
from app.utils.hashing import SecretHasher

ModelT = TypeVar("ModelT", bound=BaseModel)

_hasher = SecretHasher()


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    """Gateway bound to the request's database session."""
    return SqlAlchemyGateway(db)


def get_hasher() -> SecretHasher:
    return _hasher


def get_auth_gate(
    gateway: PersistenceGateway = Depends(get_gateway),
    hasher: SecretHasher = Depends(get_hasher),
) -> AuthenticationGate:
    return AuthenticationGate(gateway, hasher)


def get_current_user(
    authorization: Optional[str] = Header(None, description="HTTP Basic credentials"),
    gate: AuthenticationGate = Depends(get_auth_gate),
) -> UserRecord:
    """
    Authenticate the request and return the principal.

    Raises AuthenticationError (401) when the credentials are missing or wrong.
    """
    return gate.authenticate(authorization)


def get_user_service(
    gateway: PersistenceGateway = Depends(get_gateway),
    hasher: SecretHasher = Depends(get_hasher),
) -> UserService:
    return UserService(gateway, hasher)


def get_course_service(gateway: PersistenceGateway = Depends(get_gateway)) -> CourseService:
    return CourseService(gateway)


def authenticated_body(model: Type[ModelT]) -> Callable[..., Awaitable[ModelT]]:
    """
    Build a dependency that parses the JSON body into ``model`` after authentication.

    A declared body parameter is parsed before any dependency runs, so an
    unauthenticated request with a malformed body would be answered 400
    instead of 401. Reading the body here keeps the credential check first.
    """

    async def parse_body(
        request: Request,
        current_user: UserRecord = Depends(get_current_user),
    ) -> ModelT:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw else {}
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for non-UTF-8 bytes
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body", getattr(e, "pos", 0)), "msg": "JSON decode error", "input": {}}]
            )
        try:
            return model.model_validate(data)
        except SchemaValidationError as e:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
            )

    return parse_body
