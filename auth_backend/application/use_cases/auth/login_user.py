# Standard library imports
from typing import Optional

# Local application imports
from ....core.security import PasswordHasher
from ....domain.repositories.user_repository import UserRepository
from ...dto.auth_dto import UserLoginRequest
from ...dto.user_dto import UserResponse


class LoginUserUseCase:
    """Use case for checking a user's credentials"""

    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher) -> None:
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def execute(self, request: UserLoginRequest) -> Optional[UserResponse]:
        """
        Authenticate user by email and password

        Unknown email and wrong password give the same result.

        Args:
            request: Login request with email and password

        Returns:
            UserResponse if authentication successful, None otherwise
        """
        user = await self.user_repository.find_by_email(request.email)
        if user is None:
            self.password_hasher.dummy_verify(request.password)
            return None

        if not self.password_hasher.verify(request.password, user.hashed_password):
            return None

        return UserResponse.from_user(user)
