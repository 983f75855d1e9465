from .create_camera import CreateCameraUseCase
from .update_camera import UpdateCameraUseCase
from .delete_camera import DeleteCameraUseCase
from .get_camera import GetCameraUseCase
from .list_cameras import ListCamerasUseCase
from .check_camera_health import CheckCameraHealthUseCase

__all__ = [
    "CreateCameraUseCase",
    "UpdateCameraUseCase",
    "DeleteCameraUseCase",
    "GetCameraUseCase",
    "ListCamerasUseCase",
    "CheckCameraHealthUseCase",
]
