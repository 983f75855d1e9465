from typing import TYPE_CHECKING
from ...domain.repositories.camera_repository import CameraRepository
from ...domain.repositories.location_repository import LocationRepository
from ...domain.repositories.user_repository import UserRepository
from ...domain.repositories.audit_log_repository import AuditLogRepository
from ...domain.repositories.camera_archive_repository import CameraArchiveRepository
from ...domain.repositories.system_configuration_repository import SystemConfigurationRepository
from ...infrastructure.db.mongo_camera_repository import MongoCameraRepository
from ...infrastructure.db.mongo_location_repository import MongoLocationRepository
from ...infrastructure.db.mongo_user_repository import MongoUserRepository
from ...infrastructure.db.mongo_audit_log_repository import MongoAuditLogRepository
from ...infrastructure.db.mongo_camera_archive_repository import MongoCameraArchiveRepository
from ...infrastructure.db.mongo_system_configuration_repository import MongoSystemConfigurationRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets collections from database provider and creates repository instances.
        """
        container.register_singleton(
            CameraRepository,
            MongoCameraRepository(
                camera_collection=container.get("camera_collection"),
                counter_collection=container.get("counter_collection"),
            )
        )

        container.register_singleton(
            LocationRepository,
            MongoLocationRepository(location_collection=container.get("location_collection"))
        )

        container.register_singleton(
            UserRepository,
            MongoUserRepository(user_collection=container.get("user_collection"))
        )

        container.register_singleton(
            AuditLogRepository,
            MongoAuditLogRepository(audit_log_collection=container.get("audit_log_collection"))
        )

        container.register_singleton(
            CameraArchiveRepository,
            MongoCameraArchiveRepository(archive_collection=container.get("camera_archive_collection"))
        )

        container.register_singleton(
            SystemConfigurationRepository,
            MongoSystemConfigurationRepository(
                configuration_collection=container.get("system_configuration_collection")
            )
        )
