"""Constants for audit, archive and reference collections"""


class AuditLogFields:
    """Field name constants for audit log documents"""
    ENTITY_NAME = "entity_name"
    ENTITY_ID = "entity_id"

    # Entity name used for camera audit entries
    CAMERA_ENTITY = "Camera"


class CameraArchiveFields:
    """Field name constants for camera archive documents"""
    CAMERA_ID = "camera_id"
    NAME = "name"
    CAMERA_TYPE = "camera_type"
    LOCATION_ID = "location_id"
    CONFIGURATION_JSON = "configuration_json"
    CREATED_ON = "created_on"
    DELETED_ON = "deleted_on"
    DELETED_BY = "deleted_by"
    REASON = "reason"
    ARCHIVE_REASON = "archive_reason"


class SystemConfigurationFields:
    """Field name constants for system configuration documents"""
    KEY = "key"
    CAMERA_IDS = "camera_ids"


class CounterFields:
    """Field name constants for the integer id counters collection"""
    MONGO_ID = "_id"
    SEQUENCE = "seq"
