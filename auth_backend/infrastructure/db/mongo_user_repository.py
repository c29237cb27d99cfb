# Standard library imports
import logging
from datetime import datetime
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

# Local application imports
from ...core.exceptions import DuplicateEmailError, RepositoryError
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User, normalize_email
from ...domain.constants import UserFields
from ...utils.datetime_utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def _to_object_id(user_id: Optional[str]) -> Optional[ObjectId]:
    if not user_id:
        return None
    try:
        return ObjectId(user_id)
    except (InvalidId, ValueError, TypeError):
        return None


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, user_collection: AsyncIOMotorCollection) -> None:
        self.user_collection = user_collection

    async def create(self, user: User) -> User:
        """
        Insert a new user document

        Args:
            user: User domain model without an ID

        Returns:
            Created User domain model with ID and timestamps set

        Raises:
            DuplicateEmailError: If the unique email index rejects the insert
        """
        if not user:
            raise ValueError("User cannot be None")

        now = utc_now()
        user_dict = {k: v for k, v in self._user_to_dict(user).items() if v is not None}
        user_dict.pop(UserFields.MONGO_ID, None)
        user_dict[UserFields.CREATED_AT] = now
        user_dict[UserFields.UPDATED_AT] = now

        try:
            result = await self.user_collection.insert_one(user_dict)
        except DuplicateKeyError:
            raise DuplicateEmailError(user.email)
        except PyMongoError as e:
            raise RepositoryError(f"Error creating user: {str(e)}", operation="create")

        user_dict[UserFields.MONGO_ID] = result.inserted_id
        return self._document_to_user(user_dict)

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find user by email address

        Args:
            email: Email address to search for (normalized before matching)

        Returns:
            User domain model if found, None otherwise
        """
        normalized = normalize_email(email)
        if not normalized:
            return None

        try:
            document = await self.user_collection.find_one({UserFields.EMAIL: normalized})
        except PyMongoError as e:
            raise RepositoryError(f"Error finding user by email: {str(e)}", operation="find_by_email")
        if document is None:
            return None
        return self._document_to_user(document)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find user by ID

        Args:
            user_id: User ID to search for

        Returns:
            User domain model if found, None otherwise
        """
        object_id = _to_object_id(user_id)
        if object_id is None:
            return None

        try:
            document = await self.user_collection.find_one({UserFields.MONGO_ID: object_id})
        except PyMongoError as e:
            raise RepositoryError(f"Error finding user by ID: {str(e)}", operation="find_by_id")
        if document is None:
            return None
        return self._document_to_user(document)

    async def find_by_valid_reset_token(self, token: str, now: datetime) -> Optional[User]:
        if not token or not isinstance(token, str):
            return None

        try:
            document = await self.user_collection.find_one({
                UserFields.RESET_TOKEN: token,
                UserFields.RESET_EXPIRY: {"$gt": now},
            })
        except PyMongoError as e:
            raise RepositoryError(
                f"Error finding user by reset token: {str(e)}",
                operation="find_by_valid_reset_token",
            )
        if document is None:
            return None
        return self._document_to_user(document)

    async def save(self, user: User) -> User:
        """
        Save changes to an existing user

        Args:
            user: User domain model to save (must have an ID)

        Returns:
            Updated User domain model
        """
        if not user:
            raise ValueError("User cannot be None")
        object_id = _to_object_id(user.id)
        if object_id is None:
            raise ValueError(f"Invalid user ID format: {user.id}")

        user_dict = self._user_to_dict(user)
        user_dict.pop(UserFields.MONGO_ID, None)
        user_dict[UserFields.UPDATED_AT] = utc_now()

        update: dict = {"$set": {k: v for k, v in user_dict.items() if v is not None}}
        cleared = {k: "" for k in (UserFields.RESET_TOKEN, UserFields.RESET_EXPIRY) if user_dict.get(k) is None}
        if cleared:
            update["$unset"] = cleared

        try:
            updated_document = await self.user_collection.find_one_and_update(
                {UserFields.MONGO_ID: object_id},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise DuplicateEmailError(user.email)
        except PyMongoError as e:
            raise RepositoryError(f"Error saving user: {str(e)}", operation="save")

        if updated_document is None:
            raise ValueError(f"User with ID {user.id} not found")
        return self._document_to_user(updated_document)

    async def set_reset_token(self, user_id: str, token: str, expiry: datetime) -> bool:
        object_id = _to_object_id(user_id)
        if object_id is None:
            return False

        try:
            result = await self.user_collection.update_one(
                {UserFields.MONGO_ID: object_id},
                {"$set": {
                    UserFields.RESET_TOKEN: token,
                    UserFields.RESET_EXPIRY: expiry,
                    UserFields.UPDATED_AT: utc_now(),
                }},
            )
        except PyMongoError as e:
            raise RepositoryError(f"Error storing reset token: {str(e)}", operation="set_reset_token")
        return result.matched_count == 1

    async def apply_password_reset(
        self,
        user_id: str,
        token: str,
        hashed_password: str,
        now: datetime,
    ) -> Optional[User]:
        object_id = _to_object_id(user_id)
        if object_id is None or not token:
            return None

        try:
            updated_document = await self.user_collection.find_one_and_update(
                {
                    UserFields.MONGO_ID: object_id,
                    UserFields.RESET_TOKEN: token,
                    UserFields.RESET_EXPIRY: {"$gt": now},
                },
                {
                    "$set": {
                        UserFields.HASHED_PASSWORD: hashed_password,
                        UserFields.UPDATED_AT: utc_now(),
                    },
                    "$unset": {
                        UserFields.RESET_TOKEN: "",
                        UserFields.RESET_EXPIRY: "",
                    },
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise RepositoryError(f"Error resetting password: {str(e)}", operation="apply_password_reset")

        if updated_document is None:
            return None
        return self._document_to_user(updated_document)

    def _document_to_user(self, document: dict) -> User:
        """
        Convert MongoDB document to User domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            User domain model
        """
        if not document or UserFields.MONGO_ID not in document:
            raise ValueError("Invalid document: missing _id field")

        reset_token = document.get(UserFields.RESET_TOKEN)
        reset_expiry = ensure_utc(document.get(UserFields.RESET_EXPIRY))
        if reset_token is None or reset_expiry is None:
            # A half-written pair is treated as no pending reset
            reset_token, reset_expiry = None, None

        return User(
            id=str(document[UserFields.MONGO_ID]),
            full_name=document.get(UserFields.FULL_NAME, ""),
            email=document.get(UserFields.EMAIL, ""),
            hashed_password=document.get(UserFields.HASHED_PASSWORD, ""),
            reset_token=reset_token,
            reset_expiry=reset_expiry,
            created_at=ensure_utc(document.get(UserFields.CREATED_AT)),
            updated_at=ensure_utc(document.get(UserFields.UPDATED_AT)),
        )

    def _user_to_dict(self, user: User) -> dict:
        """
        Convert User domain model to MongoDB document

        Args:
            user: User domain model

        Returns:
            Dictionary ready for MongoDB storage
        """
        user_dict = {
            UserFields.FULL_NAME: user.full_name,
            UserFields.EMAIL: normalize_email(user.email),
            UserFields.HASHED_PASSWORD: user.hashed_password,
            UserFields.RESET_TOKEN: user.reset_token,
            UserFields.RESET_EXPIRY: user.reset_expiry,
        }

        object_id = _to_object_id(user.id)
        if object_id is not None:
            user_dict[UserFields.MONGO_ID] = object_id

        return user_dict
