"""
Unit tests for dependency wiring.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from camera_app.application.services.camera_service import CameraService
from camera_app.application.use_cases.camera import (
    CheckCameraHealthUseCase,
    CreateCameraUseCase,
    DeleteCameraUseCase,
    GetCameraUseCase,
    ListCamerasUseCase,
    UpdateCameraUseCase,
)
from camera_app.di.base_container import BaseContainer
from camera_app.di.providers import CameraProvider, RepositoryProvider
from camera_app.domain.repositories import CameraRepository
from camera_app.infrastructure.db.mongo_camera_repository import MongoCameraRepository
from camera_app.infrastructure.external.network_camera_service import NetworkCameraService

COLLECTION_KEYS = (
    "camera_collection",
    "location_collection",
    "user_collection",
    "audit_log_collection",
    "camera_archive_collection",
    "system_configuration_collection",
    "counter_collection",
)


@pytest.fixture
def container():
    container = BaseContainer()
    for key in COLLECTION_KEYS:
        container.register_singleton(key, MagicMock(name=key))
    return container


class TestBaseContainer:
    """Tests for BaseContainer"""

    def test_singleton_and_factory(self):
        container = BaseContainer()
        marker = object()
        container.register_singleton("marker", marker)
        container.register_factory("fresh", lambda: object())

        assert container.get("marker") is marker
        assert container.get("fresh") is not container.get("fresh")
        assert container.is_registered("fresh") is True

    def test_factory_replaces_singleton(self):
        container = BaseContainer()
        container.register_singleton("key", 1)
        container.register_factory("key", lambda: 2)
        assert container.get("key") == 2

    def test_missing_registration(self):
        with pytest.raises(ValueError, match="No registration found for CameraRepository"):
            BaseContainer().get(CameraRepository)


class TestProviders:
    """Tests for repository and camera providers"""

    def test_wires_mongo_repositories_and_use_cases(self, container, mock_settings):
        RepositoryProvider.register(container)
        CameraProvider.register(container)

        repository = container.get(CameraRepository)
        assert isinstance(repository, MongoCameraRepository)
        assert repository.camera_collection is container.get("camera_collection")
        assert isinstance(container.get(CameraService), NetworkCameraService)

        for use_case_type in (
            CreateCameraUseCase,
            UpdateCameraUseCase,
            DeleteCameraUseCase,
            GetCameraUseCase,
            ListCamerasUseCase,
            CheckCameraHealthUseCase,
        ):
            assert isinstance(container.get(use_case_type), use_case_type)

    def test_registered_camera_service_is_kept(self, container, camera_service, mock_settings):
        container.register_singleton(CameraService, camera_service)
        RepositoryProvider.register(container)
        CameraProvider.register(container)

        delete_use_case = container.get(DeleteCameraUseCase)
        assert delete_use_case.camera_service is camera_service


class TestSharedResources:
    """Tests for the probe HTTP client and container shutdown"""

    @pytest.mark.asyncio
    async def test_probe_client_is_shared_until_closed(self, mock_settings):
        from camera_app.infrastructure.http_client_factory import (
            PROBE_USER_AGENT,
            close_shared_http_client,
            get_shared_http_client,
        )

        client = get_shared_http_client()
        assert get_shared_http_client() is client
        assert client.headers["User-Agent"] == PROBE_USER_AGENT
        assert client.timeout.connect == 5.0

        await close_shared_http_client()
        assert client.is_closed
        replacement = get_shared_http_client()
        assert replacement is not client
        await close_shared_http_client()

    @pytest.mark.asyncio
    async def test_shutdown_releases_clients(self, mock_settings):
        import camera_app.di.container as container_module

        close_database = MagicMock()
        container_module._container = MagicMock()
        with patch.object(container_module, "close_database", close_database), patch.object(
            container_module, "close_shared_http_client", AsyncMock()
        ) as close_http:
            await container_module.shutdown_container()

        close_database.assert_called_once_with()
        close_http.assert_awaited_once_with()
        assert container_module._container is None
