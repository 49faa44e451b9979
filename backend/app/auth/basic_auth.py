"""HTTP Basic authentication utilities."""
import base64
import binascii
from dataclasses import dataclass, field
from typing import Optional

from app.persistence.gateway import PersistenceGateway, UserRecord
from app.utils.exceptions import AuthenticationError
from app.utils.hashing import SecretHasher
from app.utils.logger import get_logger

logger = get_logger("auth")

BASIC_SCHEME = "basic"


@dataclass(frozen=True)
class Credentials:
    """Identifier/password pair decoded from an Authorization header."""
    name: str
    password: str = field(repr=False)


def parse_basic_credentials(raw_header: Optional[str]) -> Optional[Credentials]:
    """
    Decode an ``Authorization: Basic <base64(name:password)>`` header.

    Args:
        raw_header: The raw header value, or None when absent

    Returns:
        Credentials, or None if the header is absent or malformed
    """
    if not raw_header:
        return None

    parts = raw_header.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != BASIC_SCHEME:
        return None

    try:
        decoded = base64.b64decode(parts[1].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    name, separator, password = decoded.partition(":")
    if not separator:
        return None

    return Credentials(name=name, password=password)


class AuthenticationGate:
    """
    Resolves the account behind a request's Basic credentials.

    Every request is authenticated on its own; nothing is cached between
    requests and no token is issued.
    """

    def __init__(self, gateway: PersistenceGateway, hasher: SecretHasher):
        self.gateway = gateway
        self.hasher = hasher

    def authenticate(self, raw_header: Optional[str]) -> UserRecord:
        """
        Verify the Authorization header and return the matching account.

        Raises:
            AuthenticationError: If the header is missing or malformed, the
                account does not exist, or the password does not match. The
                cause is only logged.
        """
        credentials = parse_basic_credentials(raw_header)
        if credentials is None:
            logger.warning("Auth header not found")
            raise AuthenticationError()

        user = self.gateway.find_user_by_email(credentials.name)
        if user is None:
            logger.warning(f"User not found for email: {credentials.name}")
            raise AuthenticationError()

        if not self.hasher.verify(credentials.password, user.password_hash):
            logger.warning(f"Authentication failure for email: {credentials.name}")
            raise AuthenticationError()

        logger.info(f"Authentication successful for email: {user.email_address}")
        return user
