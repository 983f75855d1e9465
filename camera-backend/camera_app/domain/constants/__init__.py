"""Constants for domain model field names"""

from .camera_fields import CameraFields
from .configuration_fields import CameraConfigurationFields
from .location_fields import LocationFields
from .user_fields import UserFields
from .audit_fields import (
    AuditLogFields,
    CameraArchiveFields,
    SystemConfigurationFields,
    CounterFields,
)

__all__ = [
    "CameraFields",
    "CameraConfigurationFields",
    "LocationFields",
    "UserFields",
    "AuditLogFields",
    "CameraArchiveFields",
    "SystemConfigurationFields",
    "CounterFields",
]
