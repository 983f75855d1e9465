"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model"""
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    IS_ACTIVE = "is_active"

    # MongoDB specific
    MONGO_ID = "_id"
