"""Account creation and lookup."""
from typing import Optional

from app.persistence.gateway import PersistenceGateway, UserRecord
from app.utils.exceptions import ValidationError
from app.utils.hashing import SecretHasher
from app.utils.logger import get_logger
from app.utils.validation import validate_account

logger = get_logger("users")


class UserService:
    """Creates accounts and exposes the authenticated account."""

    def __init__(self, gateway: PersistenceGateway, hasher: SecretHasher):
        self.gateway = gateway
        self.hasher = hasher

    def create_account(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        email_address: Optional[str],
        password: Optional[str],
    ) -> UserRecord:
        """
        Validate and store a new account.

        The password is hashed here, so only the digest reaches the gateway.

        Raises:
            ValidationError: With every violated field constraint
            UniqueConstraintError: If the email address is already taken
        """
        errors = validate_account(first_name, last_name, email_address, password)
        if errors:
            raise ValidationError(errors)

        user = self.gateway.create_user(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email_address=email_address.strip(),
            password_hash=self.hasher.hash(password),
        )
        logger.info(f"Created account {user.id} for {user.email_address}")
        return user

    def self_lookup(self, principal: UserRecord) -> UserRecord:
        # The principal was already loaded by the authentication gate
        return principal
