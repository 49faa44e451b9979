"""Field validation for incoming account and course data.

Each validator returns the ordered list of every violated constraint so the
whole list can be reported at once. An empty list means the input is valid.
"""
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from app.utils.hashing import BCRYPT_MAX_BYTES

FIRST_NAME_REQUIRED = "First name is required"
LAST_NAME_REQUIRED = "Last name is required"
EMAIL_REQUIRED = "Email address is required"
EMAIL_INVALID = "Must be a valid email address"
PASSWORD_REQUIRED = "Password is required"
PASSWORD_TOO_LONG = f"Password must not exceed {BCRYPT_MAX_BYTES} bytes"
TITLE_REQUIRED = "Title is required"
DESCRIPTION_REQUIRED = "Description is required"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_email(value: str) -> bool:
    """Check email syntax only; no DNS lookups.

    Special-use domains such as ``.test`` and ``.local`` are accepted.
    """
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def validate_account(
    first_name: Optional[str],
    last_name: Optional[str],
    email_address: Optional[str],
    password: Optional[str],
) -> List[str]:
    """Validate the fields of a new account, in field order."""
    errors: List[str] = []
    if is_blank(first_name):
        errors.append(FIRST_NAME_REQUIRED)
    if is_blank(last_name):
        errors.append(LAST_NAME_REQUIRED)
    if is_blank(email_address):
        errors.append(EMAIL_REQUIRED)
    elif not is_valid_email(email_address.strip()):
        errors.append(EMAIL_INVALID)
    if is_blank(password):
        errors.append(PASSWORD_REQUIRED)
    elif len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        errors.append(PASSWORD_TOO_LONG)
    return errors


def validate_new_course(title: Optional[str], description: Optional[str]) -> List[str]:
    errors: List[str] = []
    if is_blank(title):
        errors.append(TITLE_REQUIRED)
    if is_blank(description):
        errors.append(DESCRIPTION_REQUIRED)
    return errors


def validate_course_changes(changes: dict) -> List[str]:
    """Validate a partial course update; only supplied fields are checked."""
    errors: List[str] = []
    if "title" in changes and is_blank(changes["title"]):
        errors.append(TITLE_REQUIRED)
    if "description" in changes and is_blank(changes["description"]):
        errors.append(DESCRIPTION_REQUIRED)
    return errors
