"""
Shared pytest fixtures for camera-backend tests.
"""
import copy
import os
from typing import Dict, List, Optional, Set
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from camera_app.application.services.camera_service import CameraService
from camera_app.domain.exceptions import ConcurrencyConflictError
from camera_app.domain.models.camera import Camera
from camera_app.domain.models.camera_archive import CameraArchive
from camera_app.domain.models.location import Location
from camera_app.domain.models.user import User
from camera_app.domain.repositories import (
    AuditLogRepository,
    CameraArchiveRepository,
    CameraRepository,
    LocationRepository,
    SystemConfigurationRepository,
    UserRepository,
)


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_camera_db",
        "CAMERA_SECRET_KEY": "test_camera_secret",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.camera_secret_key = "test_camera_secret"
    mock.camera_probe_timeout_seconds = 5.0
    mock.camera_stream_base_path = "/api/cameras"
    mock.camera_admin_roles = frozenset({"Administrator", "SuperAdmin"})
    mock.camera_permanent_delete_permission = "Camera.PermanentDelete"

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("camera_app.core.config.get_settings", return_value=mock), patch(
        "camera_app.core.security.get_settings", return_value=mock
    ), patch(
        "camera_app.infrastructure.external.network_camera_service.get_settings", return_value=mock
    ), patch(
        "camera_app.infrastructure.http_client_factory.get_settings", return_value=mock
    ):
        yield mock


class InMemoryCameraRepository(CameraRepository):
    """Camera store with the same version semantics as the Mongo repository"""

    def __init__(self) -> None:
        self.cameras: Dict[int, Camera] = {}
        self._sequence = 0

    def _copies(self, cameras) -> List[Camera]:
        ordered = sorted(cameras, key=lambda c: (c.priority, c.name))
        return [copy.deepcopy(c) for c in ordered]

    async def find_by_id(self, camera_id: int) -> Optional[Camera]:
        camera = self.cameras.get(camera_id)
        return copy.deepcopy(camera) if camera else None

    async def find_by_name_and_location(self, name, location_id, exclude_id=None):
        key = name.strip().lower()
        for camera in self.cameras.values():
            if (
                not camera.is_deleted
                and camera.name.strip().lower() == key
                and camera.location_id == location_id
                and camera.id != exclude_id
            ):
                return copy.deepcopy(camera)
        return None

    async def find_by_location(self, location_id, include_deleted=False):
        return self._copies(
            c for c in self.cameras.values()
            if c.location_id == location_id and (include_deleted or not c.is_deleted)
        )

    async def find_by_user(self, user_id):
        return self._copies(c for c in self.cameras.values() if c.created_by == user_id and not c.is_deleted)

    async def find_active(self):
        return self._copies(c for c in self.cameras.values() if c.is_active and not c.is_deleted)

    async def search(self, search_term=None, camera_type=None, status=None, location_id=None,
                     include_inactive=False, include_deleted=False):
        results = []
        for camera in self.cameras.values():
            if camera.is_deleted and not include_deleted:
                continue
            if not camera.is_active and not include_inactive:
                continue
            if camera_type is not None and camera.camera_type != camera_type:
                continue
            if status is not None and camera.status != status:
                continue
            if location_id is not None and camera.location_id != location_id:
                continue
            if search_term and search_term.lower() not in camera.name.lower():
                continue
            results.append(camera)
        return self._copies(results)

    async def save(self, camera: Camera) -> Camera:
        if camera.id is None:
            self._sequence += 1
            camera.id = self._sequence
            camera.version = 1
            self.cameras[camera.id] = copy.deepcopy(camera)
            return camera

        stored = self.cameras.get(camera.id)
        if stored is None or stored.version != camera.version:
            raise ConcurrencyConflictError()
        camera.version += 1
        self.cameras[camera.id] = copy.deepcopy(camera)
        return copy.deepcopy(camera)

    async def remove(self, camera: Camera) -> None:
        stored = self.cameras.get(camera.id)
        if stored is None or stored.version != camera.version:
            raise ConcurrencyConflictError()
        del self.cameras[camera.id]


class InMemoryLocationRepository(LocationRepository):
    def __init__(self) -> None:
        self.locations: Dict[int, Location] = {
            1: Location(id=1, name="Main Lobby"),
            2: Location(id=2, name="Parking"),
            3: Location(id=3, name="Old Wing", is_active=False),
        }

    async def find_by_id(self, location_id):
        return self.locations.get(location_id)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.users: Dict[int, User] = {
            7: User(id=7, first_name="Dana", last_name="Reyes"),
            8: User(id=8, first_name="Sam", last_name="Okafor"),
        }

    async def find_by_id(self, user_id):
        return self.users.get(user_id)


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self) -> None:
        self.entities: Set[tuple] = set()

    async def exists_for_entity(self, entity_name, entity_id):
        return (entity_name, entity_id) in self.entities


class InMemoryCameraArchiveRepository(CameraArchiveRepository):
    def __init__(self) -> None:
        self.records: List[CameraArchive] = []
        self.fail = False

    async def archive(self, record):
        if self.fail:
            raise RuntimeError("Error archiving camera: write concern failed")
        for index, existing in enumerate(self.records):
            if existing.camera_id == record.camera_id:
                self.records[index] = record
                return f"archive-{index + 1}"
        self.records.append(record)
        return f"archive-{len(self.records)}"


class InMemorySystemConfigurationRepository(SystemConfigurationRepository):
    def __init__(self) -> None:
        self.referenced: Set[int] = set()

    async def references_camera(self, camera_id):
        return camera_id in self.referenced


@pytest.fixture
def camera_repository():
    return InMemoryCameraRepository()


@pytest.fixture
def location_repository():
    return InMemoryLocationRepository()


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def audit_log_repository():
    return InMemoryAuditLogRepository()


@pytest.fixture
def archive_repository():
    return InMemoryCameraArchiveRepository()


@pytest.fixture
def system_configuration_repository():
    return InMemorySystemConfigurationRepository()


@pytest.fixture
def camera_service():
    """CameraService double reporting an idle camera"""
    service = AsyncMock(spec=CameraService)
    service.is_streaming.return_value = False
    service.has_active_facial_recognition.return_value = False
    return service
