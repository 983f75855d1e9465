# Standard library imports
import json
import logging
from typing import List

# Local application imports
from ....core.security import has_elevated_rights
from ....domain.constants import AuditLogFields
from ....domain.exceptions import CONCURRENCY_CONFLICT_MESSAGE, CameraArchiveError, ConcurrencyConflictError
from ....domain.models.camera import Camera
from ....domain.models.camera_archive import CameraArchive
from ....domain.models.camera_enums import CameraStatus
from ....domain.repositories.audit_log_repository import AuditLogRepository
from ....domain.repositories.camera_archive_repository import CameraArchiveRepository
from ....domain.repositories.camera_repository import CameraRepository
from ....domain.repositories.system_configuration_repository import SystemConfigurationRepository
from ....utils.datetime_utils import to_iso, utc_now
from ...dto.camera_dto import CameraDeleteRequest, CameraDeleteResponse, DeleteOutcome
from ...services.camera_service import CameraService
from .side_effects import run_best_effort, run_required

logger = logging.getLogger(__name__)


STREAMING_BLOCK_MESSAGE = (
    "Cannot delete camera while it is actively streaming. Stop the stream first or use force delete."
)
RECOGNITION_BLOCK_MESSAGE = (
    "Cannot delete camera with active facial recognition processes. Wait for completion or use force delete."
)
HISTORICAL_DATA_BLOCK_MESSAGE = (
    "Camera has historical data (logs, events). Consider soft delete to preserve audit trail or use force delete."
)
CONFIGURATION_REFERENCE_BLOCK_MESSAGE = (
    "Camera is referenced in system configurations. Remove references first or use force delete."
)
PERMISSION_BLOCK_MESSAGE = "User does not have permission to permanently delete cameras."
VALIDATION_UNAVAILABLE_MESSAGE = "Unable to validate deletion requirements. Please try again."
SOFT_DELETE_STATUS_NOTE = "Camera deleted"
SOFT_DELETE_METADATA_TYPE = "Soft Delete"


class DeleteCameraUseCase:
    """
    Use case for soft or permanent camera deletion.

    Never raises for expected conditions: every result, including
    dependency blocks and concurrency conflicts, is reported through
    CameraDeleteResponse.outcome.
    """

    def __init__(
        self,
        camera_repository: CameraRepository,
        archive_repository: CameraArchiveRepository,
        audit_log_repository: AuditLogRepository,
        system_configuration_repository: SystemConfigurationRepository,
        camera_service: CameraService,
    ) -> None:
        self.camera_repository = camera_repository
        self.archive_repository = archive_repository
        self.audit_log_repository = audit_log_repository
        self.system_configuration_repository = system_configuration_repository
        self.camera_service = camera_service

    async def _has_historical_data(self, camera_id: int) -> bool:
        try:
            return await self.audit_log_repository.exists_for_entity(AuditLogFields.CAMERA_ENTITY, camera_id)
        except Exception as e:
            # Unknown counts as blocking
            logger.warning(f"Error checking historical data for camera {camera_id}: {e}", exc_info=True)
            return True

    async def _has_configuration_references(self, camera_id: int) -> bool:
        try:
            return await self.system_configuration_repository.references_camera(camera_id)
        except Exception as e:
            logger.warning(f"Error checking configuration references for camera {camera_id}: {e}", exc_info=True)
            return True

    async def _validate_deletion(self, camera: Camera, request: CameraDeleteRequest) -> List[str]:
        """
        Collect every reason the deletion cannot go ahead

        Returns:
            List of violations (empty when the deletion may proceed)
        """
        errors: List[str] = []

        if not request.force_delete:
            try:
                if await self.camera_service.is_streaming(camera.id):
                    errors.append(STREAMING_BLOCK_MESSAGE)
                if await self.camera_service.has_active_facial_recognition(camera.id):
                    errors.append(RECOGNITION_BLOCK_MESSAGE)
            except Exception as e:
                logger.error(f"Error during deletion validation for camera {camera.id}: {e}", exc_info=True)
                errors.append(VALIDATION_UNAVAILABLE_MESSAGE)

        if request.permanent_delete:
            if not request.force_delete:
                if await self._has_historical_data(camera.id):
                    errors.append(HISTORICAL_DATA_BLOCK_MESSAGE)
                if await self._has_configuration_references(camera.id):
                    errors.append(CONFIGURATION_REFERENCE_BLOCK_MESSAGE)

            # force does not grant rights
            if not has_elevated_rights(request.deleter_permissions, request.deleter_roles):
                errors.append(PERMISSION_BLOCK_MESSAGE)

        return errors

    async def _pre_deletion_cleanup(self, camera_id: int) -> None:
        await run_best_effort(
            f"stopping stream of camera {camera_id}",
            lambda: self.camera_service.stop_stream(camera_id, graceful=False),
        )
        await run_best_effort(
            f"cancelling facial recognition tasks of camera {camera_id}",
            lambda: self.camera_service.cancel_facial_recognition_tasks(camera_id),
        )
        await run_best_effort(
            f"clearing cache of camera {camera_id}",
            lambda: self.camera_service.clear_cache(camera_id),
        )
        logger.debug(f"Pre-deletion cleanup completed for camera {camera_id}")

    async def _post_deletion_cleanup(self, camera_id: int, permanent: bool) -> None:
        await run_best_effort(
            f"cleaning up files of camera {camera_id}",
            lambda: self.camera_service.cleanup_file_system_resources(camera_id, permanent=permanent),
        )
        await run_best_effort(
            f"broadcasting deletion of camera {camera_id}",
            lambda: self.camera_service.notify_camera_deletion(camera_id, permanent),
        )
        await run_best_effort(
            f"updating monitoring systems for camera {camera_id}",
            lambda: self.camera_service.update_monitoring_systems(camera_id, removed=True),
        )
        logger.debug(f"Post-deletion cleanup completed for camera {camera_id}")

    async def _soft_delete(self, camera: Camera, request: CameraDeleteRequest) -> None:
        camera.update_status(CameraStatus.INACTIVE, SOFT_DELETE_STATUS_NOTE, request.deleted_by)
        camera.soft_delete(request.deleted_by)

        if request.deletion_reason:
            # Replaces whatever metadata the camera carried
            camera.metadata = json.dumps({
                "reason": request.deletion_reason,
                "timestamp": to_iso(camera.deleted_on),
                "type": SOFT_DELETE_METADATA_TYPE,
            })

        await self.camera_repository.save(camera)
        logger.debug(f"Soft deletion applied to camera {camera.id}")

    async def _permanent_delete(self, camera: Camera, request: CameraDeleteRequest) -> None:
        logger.warning(
            f"Performing permanent deletion of camera '{camera.name}' (ID: {camera.id}) "
            f"by user {request.deleted_by}. Reason: {request.deletion_reason or 'not given'}"
        )
        record = CameraArchive.from_camera(camera, request.deleted_by, utc_now(), request.deletion_reason)
        archive_id = await run_required(
            f"archiving camera {camera.id}",
            lambda: self.archive_repository.archive(record),
        )
        logger.info(f"Archived camera {camera.id} as {archive_id} before permanent deletion")

        await self.camera_repository.remove(camera)
        logger.debug(f"Permanent deletion applied to camera {camera.id}")

    async def execute(self, request: CameraDeleteRequest) -> CameraDeleteResponse:
        """
        Delete a camera

        Args:
            request: Camera deletion request (carries the deleter id, roles
                and permissions)

        Returns:
            CameraDeleteResponse describing the outcome
        """
        logger.debug(
            f"Processing delete for camera {request.id}, permanent={request.permanent_delete}, "
            f"force={request.force_delete}"
        )
        try:
            camera = await self.camera_repository.find_by_id(request.id)
            if camera is None:
                logger.warning(f"Camera not found for deletion: {request.id}")
                return CameraDeleteResponse(
                    success=False,
                    outcome=DeleteOutcome.NOT_FOUND,
                    message=f"Camera with ID {request.id} not found.",
                )

            if camera.is_deleted and not request.permanent_delete:
                logger.warning(f"Attempted to soft delete already deleted camera: {request.id}")
                return CameraDeleteResponse(
                    success=False,
                    outcome=DeleteOutcome.ALREADY_DELETED,
                    message="Camera is already deleted.",
                )

            errors = await self._validate_deletion(camera, request)
            if errors:
                logger.info(f"Deletion of camera {camera.id} blocked: {'; '.join(errors)}")
                return CameraDeleteResponse(
                    success=False,
                    outcome=DeleteOutcome.VALIDATION_FAILED,
                    message="Deletion validation failed",
                    errors=errors,
                )

            await self._pre_deletion_cleanup(camera.id)

            if request.permanent_delete:
                await self._permanent_delete(camera, request)
            else:
                await self._soft_delete(camera, request)

        except CameraArchiveError as e:
            return CameraDeleteResponse(
                success=False,
                outcome=DeleteOutcome.ARCHIVE_FAILED,
                message="Camera data could not be archived. The camera was not deleted.",
                errors=[str(e)],
            )
        except ConcurrencyConflictError:
            logger.warning(f"Concurrency conflict while deleting camera {request.id}")
            return CameraDeleteResponse(
                success=False,
                outcome=DeleteOutcome.CONCURRENCY_CONFLICT,
                message=CONCURRENCY_CONFLICT_MESSAGE,
            )
        except Exception as e:
            logger.error(f"Error deleting camera {request.id}: {e}", exc_info=True)
            return CameraDeleteResponse(
                success=False,
                outcome=DeleteOutcome.INTERNAL_ERROR,
                message="An error occurred while deleting the camera. Please try again.",
            )

        await self._post_deletion_cleanup(camera.id, request.permanent_delete)

        deletion_type = "permanently deleted" if request.permanent_delete else "soft deleted"
        logger.info(
            f"Successfully {deletion_type} camera '{camera.name}' (ID: {camera.id}) by user {request.deleted_by}"
        )
        if request.permanent_delete:
            message = f"Camera '{camera.name}' has been permanently deleted."
        else:
            message = f"Camera '{camera.name}' has been deleted and can be restored if needed."
        return CameraDeleteResponse(success=True, outcome=DeleteOutcome.DELETED, message=message)
