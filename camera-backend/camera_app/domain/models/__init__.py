from .camera_enums import CameraType, CameraStatus
from .camera_configuration import CameraConfiguration
from .camera_health import (
    ConnectionTestResult,
    StreamInfo,
    HealthCheckResult,
    calculate_health_score,
)
from .camera import Camera
from .camera_archive import CameraArchive
from .location import Location
from .user import User

__all__ = [
    "CameraType",
    "CameraStatus",
    "CameraConfiguration",
    "ConnectionTestResult",
    "StreamInfo",
    "HealthCheckResult",
    "calculate_health_score",
    "Camera",
    "CameraArchive",
    "Location",
    "User",
]
