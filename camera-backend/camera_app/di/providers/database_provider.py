from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_database,
    get_camera_collection,
    get_location_collection,
    get_user_collection,
    get_audit_log_collection,
    get_camera_archive_collection,
    get_system_configuration_collection,
    get_counter_collection,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all database collections in the container.
        Repositories receive their collections from here.
        """
        container.register_singleton("database", get_database())
        container.register_singleton("camera_collection", get_camera_collection())
        container.register_singleton("location_collection", get_location_collection())
        container.register_singleton("user_collection", get_user_collection())
        container.register_singleton("audit_log_collection", get_audit_log_collection())
        container.register_singleton("camera_archive_collection", get_camera_archive_collection())
        container.register_singleton(
            "system_configuration_collection", get_system_configuration_collection()
        )
        container.register_singleton("counter_collection", get_counter_collection())
