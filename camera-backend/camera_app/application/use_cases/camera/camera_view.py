# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....domain.models.camera import Camera
from ....domain.models.camera_configuration import CameraConfiguration
from ....domain.models.camera_enums import CameraStatus
from ....domain.repositories.location_repository import LocationRepository
from ....domain.repositories.user_repository import UserRepository
from ....utils.datetime_utils import whole_minutes
from ...dto.camera_dto import CameraConfigurationDto, CameraResponse

logger = logging.getLogger(__name__)


UNKNOWN_USER_NAME = "Unknown"


def configuration_to_dto(configuration: CameraConfiguration) -> CameraConfigurationDto:
    return CameraConfigurationDto(
        resolution_width=configuration.resolution_width,
        resolution_height=configuration.resolution_height,
        resolution_display=configuration.get_resolution_string(),
        frame_rate=configuration.frame_rate,
        quality=configuration.quality,
        auto_start=configuration.auto_start,
        max_connections=configuration.max_connections,
        connection_timeout_seconds=configuration.connection_timeout_seconds,
        retry_interval_seconds=configuration.retry_interval_seconds,
        max_retry_attempts=configuration.max_retry_attempts,
        enable_motion_detection=configuration.enable_motion_detection,
        motion_sensitivity=configuration.motion_sensitivity,
        enable_recording=configuration.enable_recording,
        recording_duration_minutes=configuration.recording_duration_minutes,
        enable_facial_recognition=configuration.enable_facial_recognition,
        facial_recognition_threshold=configuration.facial_recognition_threshold,
        extended_configuration=configuration.extended_configuration,
    )


def describe_status(camera: Camera) -> str:
    """Status label with context, used by the read views"""
    if camera.status == CameraStatus.ERROR:
        return f"Error ({camera.failure_count} failures)"
    if camera.status == CameraStatus.CONNECTING:
        return "Connecting..."
    if camera.status == CameraStatus.MAINTENANCE:
        return "Under Maintenance"
    return camera.status.value


class CameraViewBuilder:
    """
    Builds the enriched CameraResponse returned by every camera use case.

    Resolves the location name and the creator/modifier display names
    through the repositories; the connection string is always masked.
    """

    def __init__(
        self,
        location_repository: LocationRepository,
        user_repository: UserRepository,
    ) -> None:
        self.location_repository = location_repository
        self.user_repository = user_repository

    async def _location_name(self, location_id: Optional[int]) -> Optional[str]:
        if location_id is None:
            return None
        location = await self.location_repository.find_by_id(location_id)
        return location.name if location else None

    async def _user_name(self, user_id: Optional[int]) -> Optional[str]:
        if user_id is None:
            return None
        user = await self.user_repository.find_by_id(user_id)
        return user.full_name if user else UNKNOWN_USER_NAME

    async def build(
        self,
        camera: Camera,
        include_elapsed: bool = False,
        contextual_status: bool = False,
    ) -> CameraResponse:
        """
        Build the response view for a camera

        Args:
            camera: Camera to describe
            include_elapsed: Fill minutes since last health check / last online
            contextual_status: Use descriptive status labels ("Error (3 failures)")

        Returns:
            CameraResponse
        """
        location_name = await self._location_name(camera.location_id)

        response = CameraResponse(
            id=camera.id,
            name=camera.name,
            description=camera.description,
            camera_type=camera.camera_type,
            camera_type_display=camera.camera_type.value,
            connection_string=camera.get_safe_connection_string(),
            username=camera.username,
            status=camera.status,
            status_display=describe_status(camera) if contextual_status else camera.status.value,
            location_id=camera.location_id,
            location_name=location_name,
            configuration=configuration_to_dto(camera.get_configuration()),
            last_health_check=camera.last_health_check,
            last_online_time=camera.last_online_time,
            last_error_message=camera.last_error_message,
            failure_count=camera.failure_count,
            enable_facial_recognition=camera.enable_facial_recognition,
            priority=camera.priority,
            manufacturer=camera.manufacturer,
            model=camera.model,
            firmware_version=camera.firmware_version,
            serial_number=camera.serial_number,
            metadata=camera.metadata,
            is_active=camera.is_active,
            is_deleted=camera.is_deleted,
            is_operational=camera.is_operational(),
            is_available_for_streaming=camera.is_available_for_streaming(),
            display_name=camera.get_display_name(location_name),
            created_on=camera.created_on,
            modified_on=camera.modified_on,
            created_by_name=await self._user_name(camera.created_by),
            modified_by_name=await self._user_name(camera.modified_by),
        )

        if include_elapsed:
            response.minutes_since_last_health_check = whole_minutes(camera.time_since_last_health_check())
            response.minutes_since_last_online = whole_minutes(camera.time_since_last_online())

        return response
