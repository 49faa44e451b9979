"""Schemas for account endpoints."""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional

from app.persistence.gateway import OwnerSummary, UserRecord


class UserCreateRequest(BaseModel):
    """Request schema for POST /users.

    Fields are optional here so missing values are reported together with
    the other field violations instead of as a schema error.
    """
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    emailAddress: Optional[str] = None
    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "secret"))


class UserResponse(BaseModel):
    """Public view of an account; the password hash has no field here."""
    model_config = ConfigDict(extra="forbid")

    id: int
    firstName: str
    lastName: str
    emailAddress: str

    @classmethod
    def from_record(cls, record: UserRecord | OwnerSummary) -> "UserResponse":
        """Convert a stored account or owner summary to its public view."""
        return cls(
            id=record.id,
            firstName=record.first_name,
            lastName=record.last_name,
            emailAddress=record.email_address,
        )
