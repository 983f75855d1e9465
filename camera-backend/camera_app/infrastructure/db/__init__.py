from .mongo_connection import (
    get_database,
    close_database,
    get_camera_collection,
    get_location_collection,
    get_user_collection,
    get_audit_log_collection,
    get_camera_archive_collection,
    get_system_configuration_collection,
    get_counter_collection,
)
from .mongo_camera_repository import MongoCameraRepository
from .mongo_location_repository import MongoLocationRepository
from .mongo_user_repository import MongoUserRepository
from .mongo_audit_log_repository import MongoAuditLogRepository
from .mongo_camera_archive_repository import MongoCameraArchiveRepository
from .mongo_system_configuration_repository import MongoSystemConfigurationRepository

__all__ = [
    "get_database",
    "close_database",
    "get_camera_collection",
    "get_location_collection",
    "get_user_collection",
    "get_audit_log_collection",
    "get_camera_archive_collection",
    "get_system_configuration_collection",
    "get_counter_collection",
    "MongoCameraRepository",
    "MongoLocationRepository",
    "MongoUserRepository",
    "MongoAuditLogRepository",
    "MongoCameraArchiveRepository",
    "MongoSystemConfigurationRepository",
]
