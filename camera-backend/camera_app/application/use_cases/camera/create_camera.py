# Standard library imports
import logging

# Local application imports
from ....core.security import encrypt_secret
from ....domain.exceptions import CameraValidationError
from ....domain.models.camera import Camera
from ....domain.models.camera_enums import CameraStatus
from ....domain.repositories.camera_repository import CameraRepository
from ....domain.repositories.location_repository import LocationRepository
from ....domain.repositories.user_repository import UserRepository
from ...dto.camera_dto import CameraCreateRequest, CameraResponse
from .camera_rules import clean_optional_text, ensure_location_active, ensure_unique_name
from .camera_view import CameraViewBuilder
from .configuration_policy import build_configuration_for_create

logger = logging.getLogger(__name__)


class CreateCameraUseCase:
    """Use case for registering a new camera"""

    def __init__(
        self,
        camera_repository: CameraRepository,
        location_repository: LocationRepository,
        user_repository: UserRepository,
    ) -> None:
        self.camera_repository = camera_repository
        self.location_repository = location_repository
        self.view_builder = CameraViewBuilder(location_repository, user_repository)

    async def execute(self, request: CameraCreateRequest) -> CameraResponse:
        """
        Create a new camera

        The camera starts Inactive; its status is established by the first
        health check.

        Args:
            request: Camera creation request (carries the creator id)

        Returns:
            CameraResponse with created camera information

        Raises:
            CameraValidationError: Duplicate name, unknown/inactive location or
                invalid definition. Nothing is persisted.
        """
        name = request.name.strip()
        connection_string = request.connection_string.strip()

        try:
            await ensure_unique_name(self.camera_repository, name, request.location_id)
            await ensure_location_active(self.location_repository, request.location_id)

            configuration = build_configuration_for_create(request.configuration)

            camera = Camera(
                id=None,
                name=name,
                camera_type=request.camera_type,
                connection_string=connection_string,
                description=clean_optional_text(request.description),
                username=clean_optional_text(request.username),
                password=encrypt_secret(request.password),
                status=CameraStatus.INACTIVE,
                location_id=request.location_id,
                configuration_json=configuration.to_json(),
                enable_facial_recognition=request.enable_facial_recognition,
                priority=request.priority,
                manufacturer=clean_optional_text(request.manufacturer),
                model=clean_optional_text(request.model),
                firmware_version=clean_optional_text(request.firmware_version),
                serial_number=clean_optional_text(request.serial_number),
                metadata=request.metadata,
            )
            camera.set_created_by(request.created_by)

            errors = camera.validation_errors()
            if errors:
                raise CameraValidationError(f"Camera configuration is invalid: {'; '.join(errors)}", errors)

            saved_camera = await self.camera_repository.save(camera)
        except CameraValidationError as e:
            logger.info(f"Camera '{name}' rejected: {e}")
            raise
        except Exception as e:
            logger.error(f"Error creating camera '{name}': {e}", exc_info=True)
            raise

        logger.info(
            f"Created camera {saved_camera.id} '{saved_camera.name}' ({saved_camera.camera_type.value}) "
            f"at {saved_camera.get_safe_connection_string()} by user {request.created_by}"
        )
        return await self.view_builder.build(saved_camera)
