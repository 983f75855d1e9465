# Standard library imports
import os
from typing import Final, FrozenSet, Optional

# External package imports
from dotenv import load_dotenv


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the camera backend.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "visitor_management_cameras")

        # Credential encryption
        self.camera_secret_key: Final[str] = os.getenv(
            "CAMERA_SECRET_KEY", "change_this_secret_in_production"
        )

        # Camera service
        self.camera_probe_timeout_seconds: Final[float] = float(
            os.getenv("CAMERA_PROBE_TIMEOUT_SECONDS", "30")
        )
        self.camera_stream_base_path: Final[str] = os.getenv(
            "CAMERA_STREAM_BASE_PATH", "/api/cameras"
        )

        # Permanent deletion rights
        self.camera_admin_roles: Final[FrozenSet[str]] = frozenset(
            role.strip()
            for role in os.getenv("CAMERA_ADMIN_ROLES", "Administrator,SuperAdmin").split(",")
            if role.strip()
        )
        self.camera_permanent_delete_permission: Final[str] = os.getenv(
            "CAMERA_PERMANENT_DELETE_PERMISSION", "Camera.PermanentDelete"
        )


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Loads a local .env file on first access so that development setups
    do not need to export variables manually.

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        load_dotenv()
        _settings = Settings()
    return _settings
