# Standard library imports
import logging

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ASCENDING

# Local application imports
from ...core.config import Settings
from ...domain.constants import UserFields

logger = logging.getLogger(__name__)

USER_COLLECTION_NAME = "users"


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Create the MongoDB client for this process

    Args:
        settings: Application settings

    Returns:
        Motor client (connections are opened lazily)
    """
    return AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=10000,
        connectTimeoutMS=10000,
    )


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance

    Returns:
        MongoDB database instance
    """
    return client[settings.mongo_database_name]


def get_user_collection(database: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
    """
    Get users collection from MongoDB

    Returns:
        MongoDB collection for users
    """
    return database[USER_COLLECTION_NAME]


async def ensure_user_indexes(user_collection: AsyncIOMotorCollection) -> None:
    """
    Create the indexes the credential store relies on.

    The unique index on email is what guarantees one user per normalized
    email; the sparse token index backs reset-token lookups.
    """
    await user_collection.create_index(
        [(UserFields.EMAIL, ASCENDING)],
        unique=True,
        name="uniq_email",
    )
    await user_collection.create_index(
        [(UserFields.RESET_TOKEN, ASCENDING)],
        sparse=True,
        name="reset_token",
    )
    logger.info("User collection indexes ensured")
