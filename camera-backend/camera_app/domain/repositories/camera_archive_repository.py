from abc import ABC, abstractmethod
from ..models.camera_archive import CameraArchive


class CameraArchiveRepository(ABC):
    """Repository interface - durable store for permanently deleted cameras"""

    @abstractmethod
    async def archive(self, record: CameraArchive) -> str:
        """Store or replace the archive record for a camera and return its identifier"""
        pass
