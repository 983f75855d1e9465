from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .camera_provider import CameraProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "CameraProvider",
]
