"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model"""
    ID = "id"
    FULL_NAME = "full_name"
    EMAIL = "email"
    HASHED_PASSWORD = "hashed_password"
    RESET_TOKEN = "reset_token"
    RESET_EXPIRY = "reset_expiry"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
