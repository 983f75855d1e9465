# Standard library imports
from enum import Enum


class CameraType(str, Enum):
    """Camera protocol / vendor class"""
    USB = "USB"
    RTSP = "RTSP"
    IP = "IP"
    ONVIF = "ONVIF"


class CameraStatus(str, Enum):
    """Connection status of a camera"""
    INACTIVE = "Inactive"
    CONNECTING = "Connecting"
    ACTIVE = "Active"
    DISCONNECTED = "Disconnected"
    MAINTENANCE = "Maintenance"
    ERROR = "Error"


# Camera types that can serve a network stream
STREAMABLE_CAMERA_TYPES = frozenset({CameraType.RTSP, CameraType.IP, CameraType.ONVIF})
