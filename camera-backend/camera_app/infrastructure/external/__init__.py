from .network_camera_service import NetworkCameraService, validate_connection_string_format

__all__ = [
    "NetworkCameraService",
    "validate_connection_string_format",
]
