"""
Unit tests for camera use cases (Create, Update, Get, List).
"""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from camera_app.application.dto.camera_dto import (
    CameraConfigurationDto,
    CameraCreateRequest,
    CameraUpdateRequest,
)
from camera_app.application.use_cases.camera.create_camera import CreateCameraUseCase
from camera_app.application.use_cases.camera.get_camera import GetCameraUseCase
from camera_app.application.use_cases.camera.list_cameras import ListCamerasUseCase
from camera_app.application.use_cases.camera.update_camera import UpdateCameraUseCase, describe_changes
from camera_app.core.security import decrypt_secret
from camera_app.domain.exceptions import (
    CONCURRENCY_CONFLICT_MESSAGE,
    CameraNotFoundError,
    CameraValidationError,
    ConcurrencyConflictError,
)
from camera_app.domain.models.camera_configuration import CameraConfiguration
from camera_app.domain.models.camera_enums import CameraStatus, CameraType
from camera_app.utils.datetime_utils import utc_now


def _create_request(**overrides) -> CameraCreateRequest:
    fields = dict(
        name="Lobby Cam",
        camera_type=CameraType.IP,
        connection_string="rtsp://lobby",
        location_id=1,
        created_by=7,
    )
    fields.update(overrides)
    return CameraCreateRequest(**fields)


def _update_request(camera_id: int, **overrides) -> CameraUpdateRequest:
    fields = dict(
        id=camera_id,
        name="Lobby Cam",
        camera_type=CameraType.IP,
        connection_string="rtsp://lobby",
        location_id=1,
        modified_by=8,
    )
    fields.update(overrides)
    return CameraUpdateRequest(**fields)


@pytest.fixture
def create_use_case(camera_repository, location_repository, user_repository):
    return CreateCameraUseCase(camera_repository, location_repository, user_repository)


@pytest.fixture
def update_use_case(camera_repository, location_repository, user_repository):
    return UpdateCameraUseCase(camera_repository, location_repository, user_repository)


class TestCreateCameraUseCase:
    """Tests for CreateCameraUseCase"""

    @pytest.mark.asyncio
    async def test_lobby_cam_gets_default_configuration(self, create_use_case, camera_repository, mock_settings):
        response = await create_use_case.execute(_create_request())

        stored = await camera_repository.find_by_id(response.id)
        assert stored.status == CameraStatus.INACTIVE
        assert stored.get_configuration() == CameraConfiguration.default()
        assert stored.created_by == 7
        assert response.status == CameraStatus.INACTIVE

    @pytest.mark.asyncio
    async def test_response_is_enriched(self, create_use_case, mock_settings):
        response = await create_use_case.execute(
            _create_request(connection_string="rtsp://admin:pw@10.0.0.9/live")
        )
        assert response.camera_type_display == "IP"
        assert response.status_display == "Inactive"
        assert response.location_name == "Main Lobby"
        assert response.display_name == "Lobby Cam (Main Lobby)"
        assert response.created_by_name == "Dana Reyes"
        assert response.connection_string == "rtsp://****@10.0.0.9/live"
        assert response.configuration.resolution_display == "1920x1080"
        assert response.is_operational is False
        assert response.is_available_for_streaming is False

    @pytest.mark.asyncio
    async def test_name_and_connection_trimmed(self, create_use_case, mock_settings):
        response = await create_use_case.execute(
            _create_request(name="  Gate  ", connection_string=" rtsp://gate ")
        )
        assert response.name == "Gate"

    @pytest.mark.asyncio
    async def test_duplicate_name_in_same_location_rejected(self, create_use_case, mock_settings):
        await create_use_case.execute(_create_request())
        with pytest.raises(CameraValidationError, match="already exists"):
            await create_use_case.execute(_create_request(name="  lobby cam "))

    @pytest.mark.asyncio
    async def test_duplicate_name_without_location_rejected(self, create_use_case, mock_settings):
        await create_use_case.execute(_create_request(location_id=None))
        with pytest.raises(CameraValidationError):
            await create_use_case.execute(_create_request(location_id=None))

    @pytest.mark.asyncio
    async def test_same_name_in_other_location_allowed(self, create_use_case, mock_settings):
        first = await create_use_case.execute(_create_request(location_id=1))
        second = await create_use_case.execute(_create_request(location_id=2))
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_inactive_location_rejected(self, create_use_case, camera_repository, mock_settings):
        with pytest.raises(CameraValidationError, match="Location with ID 3 does not exist or is inactive."):
            await create_use_case.execute(_create_request(location_id=3))
        assert camera_repository.cameras == {}

    @pytest.mark.asyncio
    async def test_unknown_location_rejected(self, create_use_case, mock_settings):
        with pytest.raises(CameraValidationError):
            await create_use_case.execute(_create_request(location_id=99))

    @pytest.mark.asyncio
    async def test_all_configuration_errors_aggregated(self, create_use_case, camera_repository, mock_settings):
        request = _create_request(
            configuration=CameraConfigurationDto(
                enable_motion_detection=True,
                enable_facial_recognition=True,
                facial_recognition_threshold=150,
            )
        )
        with pytest.raises(CameraValidationError) as exc_info:
            await create_use_case.execute(request)

        assert str(exc_info.value).startswith("Camera configuration is invalid: ")
        assert len(exc_info.value.errors) == 2
        assert "; " in str(exc_info.value)
        assert camera_repository.cameras == {}

    @pytest.mark.asyncio
    async def test_password_stored_encrypted(self, create_use_case, camera_repository, mock_settings):
        response = await create_use_case.execute(_create_request(username="admin", password="pw123"))
        stored = await camera_repository.find_by_id(response.id)
        assert stored.password != "pw123"
        assert decrypt_secret(stored.password) == "pw123"

    @pytest.mark.asyncio
    async def test_persistence_failure_propagates(self, location_repository, user_repository, mock_settings):
        repo = AsyncMock()
        repo.find_by_name_and_location.return_value = None
        repo.save.side_effect = RuntimeError("Error saving camera: connection refused")
        use_case = CreateCameraUseCase(repo, location_repository, user_repository)
        with pytest.raises(RuntimeError, match="connection refused"):
            await use_case.execute(_create_request())


class TestUpdateCameraUseCase:
    """Tests for UpdateCameraUseCase"""

    @pytest.mark.asyncio
    async def test_missing_camera(self, update_use_case, mock_settings):
        with pytest.raises(CameraNotFoundError, match="Camera with ID 42 not found."):
            await update_use_case.execute(_update_request(42))

    @pytest.mark.asyncio
    async def test_deleted_camera(self, create_use_case, update_use_case, camera_repository, mock_settings):
        created = await create_use_case.execute(_create_request())
        camera_repository.cameras[created.id].is_deleted = True
        with pytest.raises(CameraNotFoundError, match="Cannot update deleted camera"):
            await update_use_case.execute(_update_request(created.id))

    @pytest.mark.asyncio
    async def test_unset_configuration_keeps_stored_values(
        self, create_use_case, update_use_case, camera_repository, mock_settings
    ):
        created = await create_use_case.execute(
            _create_request(configuration=CameraConfigurationDto(max_connections=12, frame_rate=15))
        )
        await update_use_case.execute(_update_request(created.id, configuration=CameraConfigurationDto()))

        stored = await camera_repository.find_by_id(created.id)
        configuration = stored.get_configuration()
        assert configuration.max_connections == 12
        assert configuration.frame_rate == 15

    @pytest.mark.asyncio
    async def test_critical_change_resets_health_state(
        self, create_use_case, update_use_case, camera_repository, mock_settings
    ):
        created = await create_use_case.execute(_create_request())
        stored = camera_repository.cameras[created.id]
        stored.status = CameraStatus.ERROR
        stored.failure_count = 4
        stored.last_error_message = "Connection failed"

        response = await update_use_case.execute(
            _update_request(created.id, camera_type=CameraType.RTSP, connection_string="rtsp://lobby-2")
        )

        assert response.status == CameraStatus.INACTIVE
        assert response.failure_count == 0
        assert response.last_error_message is None

    @pytest.mark.asyncio
    async def test_non_critical_change_keeps_health_state(
        self, create_use_case, update_use_case, camera_repository, mock_settings
    ):
        created = await create_use_case.execute(_create_request())
        stored = camera_repository.cameras[created.id]
        stored.status = CameraStatus.ERROR
        stored.failure_count = 2

        response = await update_use_case.execute(_update_request(created.id, description="Main entrance"))

        assert response.status == CameraStatus.ERROR
        assert response.failure_count == 2
        assert response.description == "Main entrance"

    @pytest.mark.asyncio
    async def test_password_semantics(self, create_use_case, update_use_case, camera_repository, mock_settings):
        created = await create_use_case.execute(_create_request(username="admin", password="first"))

        await update_use_case.execute(_update_request(created.id, password=None))
        assert decrypt_secret((await camera_repository.find_by_id(created.id)).password) == "first"

        await update_use_case.execute(_update_request(created.id, password="second"))
        assert decrypt_secret((await camera_repository.find_by_id(created.id)).password) == "second"

        await update_use_case.execute(_update_request(created.id, password=""))
        assert (await camera_repository.find_by_id(created.id)).password is None

    @pytest.mark.asyncio
    async def test_deactivate(self, create_use_case, update_use_case, camera_repository, mock_settings):
        created = await create_use_case.execute(_create_request())
        response = await update_use_case.execute(_update_request(created.id, is_active=False))
        assert response.is_active is False
        assert response.modified_by_name == "Sam Okafor"

    @pytest.mark.asyncio
    async def test_rename_to_existing_name_rejected(self, create_use_case, update_use_case, mock_settings):
        await create_use_case.execute(_create_request(name="Gate"))
        lobby = await create_use_case.execute(_create_request())
        with pytest.raises(CameraValidationError, match="Another camera with name 'Gate'"):
            await update_use_case.execute(_update_request(lobby.id, name="gate"))

    @pytest.mark.asyncio
    async def test_keeping_own_name_allowed(self, create_use_case, update_use_case, mock_settings):
        created = await create_use_case.execute(_create_request())
        response = await update_use_case.execute(_update_request(created.id, priority=2))
        assert response.priority == 2

    @pytest.mark.asyncio
    async def test_invalid_update_not_persisted(
        self, create_use_case, update_use_case, camera_repository, mock_settings
    ):
        created = await create_use_case.execute(_create_request())
        with pytest.raises(CameraValidationError, match="Updated camera configuration is invalid"):
            await update_use_case.execute(
                _update_request(created.id, description="x", configuration=CameraConfigurationDto(frame_rate=500))
            )
        stored = await camera_repository.find_by_id(created.id)
        assert stored.description is None
        assert stored.get_configuration().frame_rate == 30

    @pytest.mark.asyncio
    async def test_concurrent_modification_reported(
        self, create_use_case, update_use_case, camera_repository, mock_settings
    ):
        created = await create_use_case.execute(_create_request())
        original_find = camera_repository.find_by_id

        async def find_then_bump(camera_id):
            camera = await original_find(camera_id)
            # Another writer commits in between
            camera_repository.cameras[camera_id].version += 1
            return camera

        camera_repository.find_by_id = find_then_bump
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await update_use_case.execute(_update_request(created.id, priority=3))
        assert str(exc_info.value) == CONCURRENCY_CONFLICT_MESSAGE

    @pytest.mark.asyncio
    async def test_elapsed_minutes_populated(
        self, create_use_case, update_use_case, camera_repository, mock_settings
    ):
        created = await create_use_case.execute(_create_request())
        stored = camera_repository.cameras[created.id]
        stored.last_health_check = utc_now() - timedelta(minutes=10, seconds=5)
        stored.last_online_time = None

        response = await update_use_case.execute(_update_request(created.id))

        assert response.minutes_since_last_health_check == 10
        assert response.minutes_since_last_online is None


class TestDescribeChanges:
    """Tests for the update audit summary"""

    def test_lists_changed_fields_with_masked_connection(self):
        summary = describe_changes(
            "Lobby", "Lobby East",
            "rtsp://u:p@cam/1", "rtsp://u:p@cam/2",
            CameraType.IP, CameraType.RTSP,
        )
        assert "Name: 'Lobby' → 'Lobby East'" in summary
        assert "rtsp://****@cam/2" in summary
        assert "u:p" not in summary
        assert "Type: IP → RTSP" in summary

    def test_nothing_changed(self):
        assert describe_changes("A", "A", "rtsp://a", "rtsp://a", CameraType.IP, CameraType.IP) == ""


class TestGetCameraUseCase:
    """Tests for GetCameraUseCase"""

    @pytest.mark.asyncio
    async def test_get_found(self, create_use_case, camera_repository, location_repository,
                             user_repository, mock_settings):
        created = await create_use_case.execute(_create_request())
        camera_repository.cameras[created.id].update_status(CameraStatus.ERROR, "timeout")

        use_case = GetCameraUseCase(camera_repository, location_repository, user_repository)
        result = await use_case.execute(created.id)

        assert result.name == "Lobby Cam"
        assert result.status_display == "Error (1 failures)"

    @pytest.mark.asyncio
    async def test_get_not_found_raises(self, camera_repository, location_repository, user_repository):
        use_case = GetCameraUseCase(camera_repository, location_repository, user_repository)
        with pytest.raises(CameraNotFoundError):
            await use_case.execute(99)

    @pytest.mark.asyncio
    async def test_deleted_camera_only_on_request(self, create_use_case, camera_repository,
                                                  location_repository, user_repository, mock_settings):
        created = await create_use_case.execute(_create_request())
        camera_repository.cameras[created.id].soft_delete(7)

        use_case = GetCameraUseCase(camera_repository, location_repository, user_repository)
        with pytest.raises(CameraNotFoundError):
            await use_case.execute(created.id)
        assert (await use_case.execute(created.id, include_deleted=True)).is_deleted is True


class TestListCamerasUseCase:
    """Tests for ListCamerasUseCase"""

    @pytest.mark.asyncio
    async def test_list_empty(self, camera_repository, location_repository, user_repository):
        use_case = ListCamerasUseCase(camera_repository, location_repository, user_repository)
        assert await use_case.execute() == []

    @pytest.mark.asyncio
    async def test_filters(self, create_use_case, camera_repository, location_repository,
                           user_repository, mock_settings):
        await create_use_case.execute(_create_request(name="Lobby Cam", location_id=1))
        await create_use_case.execute(_create_request(name="Garage", location_id=2, priority=1))
        use_case = ListCamerasUseCase(camera_repository, location_repository, user_repository)

        everything = await use_case.execute()
        assert [c.name for c in everything] == ["Garage", "Lobby Cam"]

        in_lobby = await use_case.execute(location_id=1)
        assert [c.name for c in in_lobby] == ["Lobby Cam"]

        by_term = await use_case.execute(search_term="  gar ")
        assert [c.name for c in by_term] == ["Garage"]

        by_user = await use_case.execute_for_user(7)
        assert len(by_user) == 2

        by_location = await use_case.execute_for_location(2)
        assert by_location[0].location_name == "Parking"
