# Standard library imports
from typing import List, Optional

# Local application imports
from ....domain.models.camera import Camera
from ....domain.models.camera_enums import CameraStatus, CameraType
from ....domain.repositories.camera_repository import CameraRepository
from ....domain.repositories.location_repository import LocationRepository
from ....domain.repositories.user_repository import UserRepository
from ...dto.camera_dto import CameraResponse
from .camera_view import CameraViewBuilder


class ListCamerasUseCase:
    """Use case for listing and searching cameras"""

    def __init__(
        self,
        camera_repository: CameraRepository,
        location_repository: LocationRepository,
        user_repository: UserRepository,
    ) -> None:
        self.camera_repository = camera_repository
        self.view_builder = CameraViewBuilder(location_repository, user_repository)

    async def _to_responses(self, cameras: List[Camera]) -> List[CameraResponse]:
        return [
            await self.view_builder.build(camera, include_elapsed=True, contextual_status=True)
            for camera in cameras
        ]

    async def execute(
        self,
        search_term: Optional[str] = None,
        camera_type: Optional[CameraType] = None,
        status: Optional[CameraStatus] = None,
        location_id: Optional[int] = None,
        include_inactive: bool = False,
        include_deleted: bool = False,
    ) -> List[CameraResponse]:
        """
        List cameras matching the given filters

        Args:
            search_term: Matched against name, description, manufacturer, model and serial
            camera_type: Only cameras of this type
            status: Only cameras in this status
            location_id: Only cameras in this location
            include_inactive: Include deactivated cameras
            include_deleted: Include soft-deleted cameras

        Returns:
            List of CameraResponse objects, ordered by priority then name
        """
        cameras = await self.camera_repository.search(
            search_term=search_term.strip() if search_term else None,
            camera_type=camera_type,
            status=status,
            location_id=location_id,
            include_inactive=include_inactive,
            include_deleted=include_deleted,
        )
        return await self._to_responses(cameras)

    async def execute_for_location(self, location_id: int, include_deleted: bool = False) -> List[CameraResponse]:
        """List every camera installed in a location"""
        cameras = await self.camera_repository.find_by_location(location_id, include_deleted=include_deleted)
        return await self._to_responses(cameras)

    async def execute_for_user(self, user_id: int) -> List[CameraResponse]:
        """List the non-deleted cameras a user registered"""
        cameras = await self.camera_repository.find_by_user(user_id)
        return await self._to_responses(cameras)
