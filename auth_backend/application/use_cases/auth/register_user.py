# Standard library imports
import logging

# Local application imports
from ....core.exceptions import DuplicateEmailError
from ....core.security import PasswordHasher
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.user import User
from ....domain.policies.password_policy import validate_password_policy
from ...dto.auth_dto import UserRegistrationRequest
from ...dto.user_dto import UserResponse

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Use case for registering a new user"""

    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher) -> None:
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def execute(self, request: UserRegistrationRequest) -> UserResponse:
        """
        Register a new user

        Args:
            request: Registration request with user details

        Returns:
            UserResponse with created user information

        Raises:
            ValidationError: If the password does not satisfy the policy
            DuplicateEmailError: If user with email already exists
        """
        validate_password_policy(request.password)

        # Fast path only; the unique index is what actually enforces this
        existing_user = await self.user_repository.find_by_email(request.email)
        if existing_user is not None:
            raise DuplicateEmailError(request.email)

        new_user = User(
            id=None,  # Will be set by repository
            full_name=request.full_name,
            email=request.email,
            hashed_password=self.password_hasher.hash(request.password),
        )

        saved_user = await self.user_repository.create(new_user)
        logger.info("Registered user %s", saved_user.id)

        return UserResponse.from_user(saved_user)
