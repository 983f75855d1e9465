"""Constants for Location model field names"""


class LocationFields:
    """Field name constants for Location model"""
    NAME = "name"
    IS_ACTIVE = "is_active"

    # MongoDB specific
    MONGO_ID = "_id"
