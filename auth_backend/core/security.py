# Standard library imports
import secrets

# External package imports
import bcrypt


# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_BCRYPT_ROUNDS = 12
RESET_TOKEN_BYTES = 32


def _encode_password(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class PasswordHasher:
    """One-way salted password hashing backed by bcrypt"""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        if rounds < 4 or rounds > 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds
        # Built up front so the first unknown-email login costs one checkpw like the rest
        self._dummy_hash: bytes = bcrypt.hashpw(
            secrets.token_hex(16).encode("utf-8"),
            bcrypt.gensalt(rounds=rounds),
        )

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain password using bcrypt

        A fresh salt is generated on every call and embedded in the returned
        digest, so verify() needs nothing else.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_encode_password(plain_password), salt)
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain password against a hashed password

        Args:
            plain_password: The plain text password to verify
            hashed_password: The hashed password to compare against

        Returns:
            True if passwords match, False otherwise (including malformed hashes)
        """
        if not plain_password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                _encode_password(plain_password),
                hashed_password.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def dummy_verify(self, plain_password: str) -> None:
        """Spend one verification's worth of work when there is no user to check."""
        bcrypt.checkpw(_encode_password(plain_password or " "), self._dummy_hash)


def generate_reset_token(num_bytes: int = RESET_TOKEN_BYTES) -> str:
    """
    Generate a password reset token

    Args:
        num_bytes: Bytes of randomness (32 bytes = 256 bits)

    Returns:
        Hex-encoded token string
    """
    return secrets.token_hex(num_bytes)
