from abc import ABC, abstractmethod
from typing import Optional, List
from ..models.camera import Camera
from ..models.camera_enums import CameraStatus, CameraType


class CameraRepository(ABC):
    """Repository interface - defines contract for camera data access"""

    @abstractmethod
    async def find_by_id(self, camera_id: int) -> Optional[Camera]:
        """Find camera by ID (deleted cameras included)"""
        pass

    @abstractmethod
    async def find_by_name_and_location(
        self,
        name: str,
        location_id: Optional[int],
        exclude_id: Optional[int] = None,
    ) -> Optional[Camera]:
        """Find a non-deleted camera by case-insensitive trimmed name within a location"""
        pass

    @abstractmethod
    async def find_by_location(self, location_id: int, include_deleted: bool = False) -> List[Camera]:
        """Find all cameras installed in a location"""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: int) -> List[Camera]:
        """Find all non-deleted cameras created by a user"""
        pass

    @abstractmethod
    async def find_active(self) -> List[Camera]:
        """Find all active, non-deleted cameras (health check candidates)"""
        pass

    @abstractmethod
    async def search(
        self,
        search_term: Optional[str] = None,
        camera_type: Optional[CameraType] = None,
        status: Optional[CameraStatus] = None,
        location_id: Optional[int] = None,
        include_inactive: bool = False,
        include_deleted: bool = False,
    ) -> List[Camera]:
        """Filter cameras, ordered by priority then name"""
        pass

    @abstractmethod
    async def save(self, camera: Camera) -> Camera:
        """
        Save camera (create or update) atomically.

        Updates are conditional on camera.version; a mismatch raises
        ConcurrencyConflictError.
        """
        pass

    @abstractmethod
    async def remove(self, camera: Camera) -> None:
        """Permanently remove camera, conditional on camera.version"""
        pass
