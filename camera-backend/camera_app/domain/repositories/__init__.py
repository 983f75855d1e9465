from .camera_repository import CameraRepository
from .location_repository import LocationRepository
from .user_repository import UserRepository
from .audit_log_repository import AuditLogRepository
from .camera_archive_repository import CameraArchiveRepository
from .system_configuration_repository import SystemConfigurationRepository

__all__ = [
    "CameraRepository",
    "LocationRepository",
    "UserRepository",
    "AuditLogRepository",
    "CameraArchiveRepository",
    "SystemConfigurationRepository",
]
