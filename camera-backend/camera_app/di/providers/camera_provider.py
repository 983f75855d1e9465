import logging
from typing import TYPE_CHECKING
from ...domain.repositories.camera_repository import CameraRepository
from ...domain.repositories.location_repository import LocationRepository
from ...domain.repositories.user_repository import UserRepository
from ...domain.repositories.audit_log_repository import AuditLogRepository
from ...domain.repositories.camera_archive_repository import CameraArchiveRepository
from ...domain.repositories.system_configuration_repository import SystemConfigurationRepository
from ...application.services.camera_service import CameraService
from ...application.use_cases.camera.create_camera import CreateCameraUseCase
from ...application.use_cases.camera.update_camera import UpdateCameraUseCase
from ...application.use_cases.camera.delete_camera import DeleteCameraUseCase
from ...application.use_cases.camera.get_camera import GetCameraUseCase
from ...application.use_cases.camera.list_cameras import ListCamerasUseCase
from ...application.use_cases.camera.check_camera_health import CheckCameraHealthUseCase
from ...infrastructure.external.network_camera_service import NetworkCameraService

if TYPE_CHECKING:
    from ..base_container import BaseContainer

logger = logging.getLogger(__name__)


class CameraProvider:
    """Camera provider - registers the camera service and all camera use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the camera service and camera use cases.
        The service is a singleton (it owns the session registries);
        use cases are created on-demand via factories.
        """
        # Keep an already registered service (tests swap in their own)
        if not container.is_registered(CameraService):
            container.register_singleton(
                CameraService,
                NetworkCameraService(camera_repository=container.get(CameraRepository))
            )

        container.register_factory(
            CreateCameraUseCase,
            lambda: CreateCameraUseCase(
                camera_repository=container.get(CameraRepository),
                location_repository=container.get(LocationRepository),
                user_repository=container.get(UserRepository),
            )
        )

        container.register_factory(
            UpdateCameraUseCase,
            lambda: UpdateCameraUseCase(
                camera_repository=container.get(CameraRepository),
                location_repository=container.get(LocationRepository),
                user_repository=container.get(UserRepository),
            )
        )

        container.register_factory(
            DeleteCameraUseCase,
            lambda: DeleteCameraUseCase(
                camera_repository=container.get(CameraRepository),
                archive_repository=container.get(CameraArchiveRepository),
                audit_log_repository=container.get(AuditLogRepository),
                system_configuration_repository=container.get(SystemConfigurationRepository),
                camera_service=container.get(CameraService),
            )
        )

        container.register_factory(
            GetCameraUseCase,
            lambda: GetCameraUseCase(
                camera_repository=container.get(CameraRepository),
                location_repository=container.get(LocationRepository),
                user_repository=container.get(UserRepository),
            )
        )

        container.register_factory(
            ListCamerasUseCase,
            lambda: ListCamerasUseCase(
                camera_repository=container.get(CameraRepository),
                location_repository=container.get(LocationRepository),
                user_repository=container.get(UserRepository),
            )
        )

        container.register_factory(
            CheckCameraHealthUseCase,
            lambda: CheckCameraHealthUseCase(camera_service=container.get(CameraService))
        )

        logger.info("Registered camera service and camera use cases")
