"""Constants for Camera model field names"""


class CameraFields:
    """Field name constants for Camera model"""
    ID = "id"
    NAME = "name"
    NORMALIZED_NAME = "normalized_name"
    DESCRIPTION = "description"
    CAMERA_TYPE = "camera_type"
    CONNECTION_STRING = "connection_string"
    USERNAME = "username"
    PASSWORD = "password"
    STATUS = "status"
    LOCATION_ID = "location_id"
    CONFIGURATION_JSON = "configuration_json"
    LAST_HEALTH_CHECK = "last_health_check"
    LAST_ONLINE_TIME = "last_online_time"
    LAST_ERROR_MESSAGE = "last_error_message"
    FAILURE_COUNT = "failure_count"
    ENABLE_FACIAL_RECOGNITION = "enable_facial_recognition"
    PRIORITY = "priority"
    MANUFACTURER = "manufacturer"
    MODEL = "model"
    FIRMWARE_VERSION = "firmware_version"
    SERIAL_NUMBER = "serial_number"
    METADATA = "metadata"
    IS_ACTIVE = "is_active"
    IS_DELETED = "is_deleted"
    CREATED_BY = "created_by"
    CREATED_ON = "created_on"
    MODIFIED_BY = "modified_by"
    MODIFIED_ON = "modified_on"
    DELETED_BY = "deleted_by"
    DELETED_ON = "deleted_on"
    VERSION = "version"

    # MongoDB specific
    MONGO_ID = "_id"  # Integer camera id is stored as MongoDB's _id
