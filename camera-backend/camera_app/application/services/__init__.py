from .camera_service import CameraService

__all__ = ["CameraService"]
