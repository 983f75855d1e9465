# Local application imports
from ....domain.exceptions import CameraNotFoundError
from ....domain.repositories.camera_repository import CameraRepository
from ....domain.repositories.location_repository import LocationRepository
from ....domain.repositories.user_repository import UserRepository
from ...dto.camera_dto import CameraResponse
from .camera_view import CameraViewBuilder


class GetCameraUseCase:
    """Use case for getting a camera by ID"""

    def __init__(
        self,
        camera_repository: CameraRepository,
        location_repository: LocationRepository,
        user_repository: UserRepository,
    ) -> None:
        self.camera_repository = camera_repository
        self.view_builder = CameraViewBuilder(location_repository, user_repository)

    async def execute(self, camera_id: int, include_deleted: bool = False) -> CameraResponse:
        """
        Get a camera by ID

        Args:
            camera_id: ID of the camera
            include_deleted: Also return soft-deleted cameras

        Returns:
            CameraResponse with camera information

        Raises:
            CameraNotFoundError: If camera not found (or deleted and not requested)
        """
        camera = await self.camera_repository.find_by_id(camera_id)

        if camera is None or (camera.is_deleted and not include_deleted):
            raise CameraNotFoundError(f"Camera with ID {camera_id} not found.")

        return await self.view_builder.build(camera, include_elapsed=True, contextual_status=True)
