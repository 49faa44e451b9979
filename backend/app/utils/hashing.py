"""Password hashing with bcrypt."""
import bcrypt

from app.config import settings

# bcrypt only considers the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class SecretHasher:
    """
    One-way, salted hashing and verification of account passwords.

    bcrypt is deliberately slow; the work factor is configurable so tests
    can use a cheap one.
    """

    def __init__(self, rounds: int = settings.bcrypt_rounds):
        """
        Args:
            rounds: The bcrypt work factor (log2 of iterations)
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt with a fresh salt.

        Args:
            password: The plaintext password

        Returns:
            Bcrypt hash string
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Verify a password against a bcrypt hash.

        The comparison inside ``bcrypt.checkpw`` is constant-time.

        Args:
            password: The password to verify
            password_hash: The stored bcrypt hash

        Returns:
            True if the password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Malformed hash or over-long password
            return False
