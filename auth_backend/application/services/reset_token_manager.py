# Standard library imports
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple

# Local application imports
from ...core.exceptions import AuthenticationError, INVALID_RESET_TOKEN_MESSAGE, RepositoryError
from ...core.security import generate_reset_token
from ...domain.models.user import User
from ...domain.repositories.user_repository import UserRepository
from ...utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)


class ResetTokenManager:
    """
    Issues, validates and consumes single-use password reset tokens.

    A user holds at most one live token: issuing again overwrites the
    previous token and expiry. Every write is a single-document update.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        ttl: timedelta = DEFAULT_RESET_TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.user_repository = user_repository
        self.ttl = ttl
        self.clock = clock

    async def issue(self, user: User) -> Tuple[str, datetime]:
        """
        Generate and persist a reset token for user

        Args:
            user: Persisted user requesting a reset

        Returns:
            (token, expiry) tuple

        Raises:
            RepositoryError: If the token could not be stored
        """
        token = generate_reset_token()
        expiry = self.clock() + self.ttl

        stored = await self.user_repository.set_reset_token(user.id or "", token, expiry)
        if not stored:
            raise RepositoryError(
                f"User {user.id} disappeared before a reset token could be stored",
                operation="set_reset_token",
            )

        user.reset_token = token
        user.reset_expiry = expiry
        return token, expiry

    async def validate(self, token: str) -> Optional[User]:
        """Return the user owning token if it is still live, None otherwise."""
        if not token:
            return None
        return await self.user_repository.find_by_valid_reset_token(token, self.clock())

    async def consume(self, user: User) -> User:
        """
        Persist user's new password hash and clear its reset token in one write

        Callers hash the new password onto user.hashed_password first; the
        write only lands while the token user was validated with is still
        stored and unexpired.

        Raises:
            AuthenticationError: If the token was consumed or expired meanwhile
        """
        if not user.reset_token:
            raise AuthenticationError(INVALID_RESET_TOKEN_MESSAGE)

        updated = await self.user_repository.apply_password_reset(
            user.id or "",
            user.reset_token,
            user.hashed_password,
            self.clock(),
        )
        if updated is None:
            logger.info("Reset token for user %s was no longer valid at consume time", user.id)
            raise AuthenticationError(INVALID_RESET_TOKEN_MESSAGE)
        return updated
