from abc import ABC, abstractmethod
from typing import Optional, List

from ...domain.models.camera_enums import CameraStatus, CameraType
from ...domain.models.camera_health import ConnectionTestResult, StreamInfo, HealthCheckResult


class CameraService(ABC):
    """
    Capability surface over physical cameras.

    Consumed by the lifecycle use cases and by the periodic health monitor.
    Implementations own the networking / vendor SDK details.
    """

    # Connection management

    @abstractmethod
    async def test_connection(self, camera_id: int, update_status: bool = True) -> bool:
        """Test a stored camera's connection, optionally recording the resulting status"""
        pass

    @abstractmethod
    async def test_connection_parameters(
        self,
        camera_type: CameraType,
        connection_string: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout_seconds: int = 30,
    ) -> ConnectionTestResult:
        """Test explicit connection parameters without touching stored state"""
        pass

    @abstractmethod
    async def get_connection_status(self, camera_id: int) -> CameraStatus:
        pass

    # Streaming

    @abstractmethod
    async def start_stream(self, camera_id: int) -> bool:
        pass

    @abstractmethod
    async def stop_stream(self, camera_id: int, graceful: bool = True) -> bool:
        pass

    @abstractmethod
    async def is_streaming(self, camera_id: int) -> bool:
        pass

    @abstractmethod
    async def get_stream_info(self, camera_id: int) -> Optional[StreamInfo]:
        pass

    # Facial recognition

    @abstractmethod
    async def has_active_facial_recognition(self, camera_id: int) -> bool:
        pass

    @abstractmethod
    async def start_facial_recognition(self, camera_id: int) -> bool:
        pass

    @abstractmethod
    async def stop_facial_recognition(self, camera_id: int) -> bool:
        pass

    @abstractmethod
    async def cancel_facial_recognition_tasks(self, camera_id: int) -> None:
        pass

    # Health monitoring

    @abstractmethod
    async def perform_health_check(self, camera_id: int) -> HealthCheckResult:
        pass

    @abstractmethod
    async def perform_health_check_all(self) -> List[HealthCheckResult]:
        """Health check every active, non-deleted camera"""
        pass

    @abstractmethod
    async def update_camera_status(
        self,
        camera_id: int,
        status: CameraStatus,
        error_message: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> None:
        pass

    # Resource management

    @abstractmethod
    async def clear_cache(self, camera_id: int) -> None:
        pass

    @abstractmethod
    async def clear_all_caches(self) -> None:
        pass

    @abstractmethod
    async def cleanup_file_system_resources(self, camera_id: int, permanent: bool = False) -> None:
        pass

    # Notifications and integration

    @abstractmethod
    async def notify_camera_deletion(self, camera_id: int, permanent: bool) -> None:
        pass

    @abstractmethod
    async def update_monitoring_systems(self, camera_id: int, removed: bool = False) -> None:
        pass

    # Frame capture

    @abstractmethod
    async def capture_frame(self, camera_id: int) -> Optional[bytes]:
        pass

    @abstractmethod
    async def start_frame_capture(self, camera_id: int) -> bool:
        pass

    @abstractmethod
    async def stop_frame_capture(self, camera_id: int) -> bool:
        pass
