# Standard library imports
import logging
from typing import List, Optional

# Local application imports
from ....core.security import encrypt_secret
from ....domain.exceptions import CameraNotFoundError, CameraValidationError, ConcurrencyConflictError
from ....domain.models.camera import Camera, mask_connection_string
from ....domain.models.camera_enums import CameraType
from ....domain.repositories.camera_repository import CameraRepository
from ....domain.repositories.location_repository import LocationRepository
from ....domain.repositories.user_repository import UserRepository
from ...dto.camera_dto import CameraUpdateRequest, CameraResponse
from .camera_rules import clean_optional_text, ensure_location_active, ensure_unique_name
from .camera_view import CameraViewBuilder
from .configuration_policy import merge_configuration_for_update

logger = logging.getLogger(__name__)


def describe_changes(
    original_name: str,
    new_name: str,
    original_connection_string: str,
    new_connection_string: str,
    original_type: CameraType,
    new_type: CameraType,
) -> str:
    """
    Audit summary of the identity fields that changed

    Connection strings are masked. Returns an empty string when nothing changed.
    """
    changes: List[str] = []
    if original_name != new_name:
        changes.append(f"Name: '{original_name}' → '{new_name}'")
    if original_connection_string != new_connection_string:
        changes.append(
            f"Connection: '{mask_connection_string(original_connection_string)}' → "
            f"'{mask_connection_string(new_connection_string)}'"
        )
    if original_type != new_type:
        changes.append(f"Type: {original_type.value} → {new_type.value}")
    return "; ".join(changes)


class UpdateCameraUseCase:
    """Use case for editing an existing camera"""

    def __init__(
        self,
        camera_repository: CameraRepository,
        location_repository: LocationRepository,
        user_repository: UserRepository,
    ) -> None:
        self.camera_repository = camera_repository
        self.location_repository = location_repository
        self.view_builder = CameraViewBuilder(location_repository, user_repository)

    def _apply_password(self, camera: Camera, password: Optional[str]) -> None:
        # None keeps the stored secret, "" clears it
        if password is None:
            return
        camera.password = encrypt_secret(password) if password else None

    async def execute(self, request: CameraUpdateRequest) -> CameraResponse:
        """
        Update a camera

        Configuration values missing from the request keep the camera's
        stored values. Changing the connection string or the camera type
        resets the failure state and puts the camera back to Inactive.

        Args:
            request: Camera update request (carries the modifier id)

        Returns:
            CameraResponse including minutes since last health check / online

        Raises:
            CameraNotFoundError: If the camera is missing or soft-deleted
            CameraValidationError: If the updated camera is invalid
            ConcurrencyConflictError: If the camera changed since it was loaded
        """
        camera = await self.camera_repository.find_by_id(request.id)
        if camera is None:
            raise CameraNotFoundError(f"Camera with ID {request.id} not found.")
        if camera.is_deleted:
            raise CameraNotFoundError(f"Cannot update deleted camera {request.id}.")

        original_name = camera.name
        original_connection_string = camera.connection_string
        original_type = camera.camera_type

        name = request.name.strip()
        connection_string = request.connection_string.strip()

        try:
            await ensure_unique_name(self.camera_repository, name, request.location_id, exclude_id=camera.id)
            await ensure_location_active(self.location_repository, request.location_id)

            configuration = merge_configuration_for_update(camera.get_configuration(), request.configuration)

            camera.name = name
            camera.description = clean_optional_text(request.description)
            camera.camera_type = request.camera_type
            camera.connection_string = connection_string
            camera.username = clean_optional_text(request.username)
            camera.location_id = request.location_id
            camera.enable_facial_recognition = request.enable_facial_recognition
            camera.priority = request.priority
            camera.manufacturer = clean_optional_text(request.manufacturer)
            camera.model = clean_optional_text(request.model)
            camera.firmware_version = clean_optional_text(request.firmware_version)
            camera.serial_number = clean_optional_text(request.serial_number)
            camera.metadata = request.metadata
            self._apply_password(camera, request.password)
            camera.set_configuration(configuration)

            if request.is_active != camera.is_active:
                if request.is_active:
                    camera.activate(request.modified_by)
                else:
                    camera.deactivate(request.modified_by)
            else:
                camera.update_modified_by(request.modified_by)

            if camera.connection_string != original_connection_string or camera.camera_type != original_type:
                logger.info(f"Critical settings of camera {camera.id} changed, resetting its health state")
                camera.reset_error_state(request.modified_by)

            errors = camera.validation_errors()
            if errors:
                raise CameraValidationError(
                    f"Updated camera configuration is invalid: {'; '.join(errors)}", errors
                )

            saved_camera = await self.camera_repository.save(camera)
        except CameraValidationError as e:
            logger.info(f"Update of camera {request.id} rejected: {e}")
            raise
        except ConcurrencyConflictError:
            logger.warning(f"Concurrency conflict while updating camera {request.id}")
            raise
        except Exception as e:
            logger.error(f"Error updating camera {request.id}: {e}", exc_info=True)
            raise

        changes = describe_changes(
            original_name,
            saved_camera.name,
            original_connection_string,
            saved_camera.connection_string,
            original_type,
            saved_camera.camera_type,
        )
        logger.info(
            f"Updated camera {saved_camera.id} by user {request.modified_by}. "
            f"Changes: {changes or 'configuration only'}"
        )
        return await self.view_builder.build(saved_camera, include_elapsed=True)
