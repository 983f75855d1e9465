# Standard library imports
import asyncio
import logging
import time
from typing import Optional, List, Dict, Set
from urllib.parse import urlsplit

# External package imports
import httpx

# Local application imports
from ...application.services.camera_service import CameraService
from ...core.config import get_settings
from ...core.security import decrypt_secret
from ...domain.exceptions import ConcurrencyConflictError
from ...domain.models.camera import Camera, mask_connection_string
from ...domain.models.camera_enums import CameraStatus, CameraType
from ...domain.models.camera_health import ConnectionTestResult, StreamInfo, HealthCheckResult
from ...domain.repositories.camera_repository import CameraRepository
from ...utils.datetime_utils import utc_now
from ..http_client_factory import get_shared_http_client

logger = logging.getLogger(__name__)


def validate_connection_string_format(camera_type: CameraType, connection_string: Optional[str]) -> Optional[str]:
    """
    Check that a connection string can be probed for the given camera type

    Returns:
        Error message, or None when the format is acceptable
    """
    if not connection_string or not connection_string.strip():
        return "Connection string cannot be empty"

    lowered = connection_string.strip().lower()
    if camera_type == CameraType.RTSP and not lowered.startswith("rtsp://"):
        return "RTSP connection string must start with 'rtsp://'"
    if camera_type == CameraType.IP and not lowered.startswith(("http://", "https://", "rtsp://")):
        return "IP camera connection string must start with 'http://', 'https://' or 'rtsp://'"
    return None


class NetworkCameraService(CameraService):
    """
    CameraService backed by network probes and in-process session registries.

    IP cameras with an HTTP endpoint are probed with a GET request; RTSP and
    ONVIF endpoints are checked for a well-formed URL; USB cameras need a
    device path. Stream, facial recognition and frame capture sessions are
    tracked in memory only. No media is transported.
    """

    def __init__(
        self,
        camera_repository: CameraRepository,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.camera_repository = camera_repository
        self._http_client = http_client
        self._settings = get_settings()
        self._lock = asyncio.Lock()
        self._active_streams: Dict[int, StreamInfo] = {}
        self._active_recognition: Set[int] = set()
        self._frame_captures: Set[int] = set()
        self._probe_cache: Dict[int, ConnectionTestResult] = {}

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client if self._http_client is not None else get_shared_http_client()

    def _stream_url(self, camera_id: int) -> str:
        return f"{self._settings.camera_stream_base_path.rstrip('/')}/{camera_id}/stream"

    # Connection management

    async def _probe_camera(self, camera: Camera) -> ConnectionTestResult:
        result = await self.test_connection_parameters(
            camera.camera_type,
            camera.connection_string,
            camera.username,
            decrypt_secret(camera.password),
            camera.get_configuration().connection_timeout_seconds,
        )
        async with self._lock:
            self._probe_cache[camera.id] = result
        return result

    async def test_connection(self, camera_id: int, update_status: bool = True) -> bool:
        try:
            camera = await self.camera_repository.find_by_id(camera_id)
            if camera is None:
                logger.warning(f"Camera not found for connection test: {camera_id}")
                return False

            result = await self._probe_camera(camera)

            if update_status:
                await self.update_camera_status(camera_id, result.status, result.error_message)

            return result.is_success
        except Exception as e:
            logger.error(f"Error testing camera connection for camera {camera_id}: {e}", exc_info=True)
            if update_status:
                await self.update_camera_status(camera_id, CameraStatus.ERROR, str(e))
            return False

    async def test_connection_parameters(
        self,
        camera_type: CameraType,
        connection_string: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout_seconds: int = 30,
    ) -> ConnectionTestResult:
        """
        Probe explicit connection parameters

        Args:
            camera_type: How to reach the camera
            connection_string: URL or device path
            username: Optional user for basic authentication
            password: Optional plain text password
            timeout_seconds: Upper bound for the whole probe

        Returns:
            ConnectionTestResult with the measured response time. A timeout
            reports Disconnected, any other failure reports Error.
        """
        masked = mask_connection_string(connection_string)
        logger.debug(f"Testing {CameraType(camera_type).value} camera connection: {masked}")

        format_error = validate_connection_string_format(camera_type, connection_string)
        if format_error:
            return ConnectionTestResult.failure(format_error)

        timeout = min(float(timeout_seconds), self._settings.camera_probe_timeout_seconds)
        started = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                self._probe(CameraType(camera_type), connection_string.strip(), username, password, timeout),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Camera connection test timed out for {masked}")
            return ConnectionTestResult.failure("Connection timeout", CameraStatus.DISCONNECTED)
        except Exception as e:
            logger.error(f"Error testing camera connection for {masked}: {e}", exc_info=True)
            return ConnectionTestResult.failure(f"Connection test failed: {e}")

        result.response_time_ms = int((time.perf_counter() - started) * 1000)
        logger.debug(
            f"Camera connection test completed in {result.response_time_ms}ms. Success: {result.is_success}"
        )
        return result

    async def _probe(
        self,
        camera_type: CameraType,
        connection_string: str,
        username: Optional[str],
        password: Optional[str],
        timeout: float,
    ) -> ConnectionTestResult:
        if camera_type == CameraType.USB:
            # Device presence is checked by the capture host
            return ConnectionTestResult.success()
        if camera_type == CameraType.IP and connection_string.lower().startswith(("http://", "https://")):
            return await self._probe_http(connection_string, username, password, timeout)
        return self._probe_stream_url(connection_string, camera_type.value)

    async def _probe_http(
        self,
        url: str,
        username: Optional[str],
        password: Optional[str],
        timeout: float,
    ) -> ConnectionTestResult:
        auth = httpx.BasicAuth(username, password) if username and password else None
        try:
            response = await self.http_client.get(url, auth=auth, timeout=timeout)
        except httpx.TimeoutException:
            return ConnectionTestResult.failure("Connection timeout", CameraStatus.DISCONNECTED)
        except httpx.HTTPError as e:
            return ConnectionTestResult.failure(f"HTTP connection failed: {e}")

        if response.is_success:
            return ConnectionTestResult.success()
        return ConnectionTestResult.failure(f"HTTP {response.status_code}: {response.reason_phrase}")

    def _probe_stream_url(self, url: str, label: str) -> ConnectionTestResult:
        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError:
            return ConnectionTestResult.failure(f"Invalid {label} URL format")

        if not parts.scheme or not parts.hostname:
            return ConnectionTestResult.failure(f"Invalid {label} URL format")

        logger.debug(f"Testing {label} connection to {parts.hostname}:{port or 'default'}")
        return ConnectionTestResult.success()

    async def get_connection_status(self, camera_id: int) -> CameraStatus:
        try:
            camera = await self.camera_repository.find_by_id(camera_id)
            return camera.status if camera is not None else CameraStatus.INACTIVE
        except Exception as e:
            logger.error(f"Error getting camera status for camera {camera_id}: {e}", exc_info=True)
            return CameraStatus.ERROR

    async def last_probe(self, camera_id: int) -> Optional[ConnectionTestResult]:
        """Most recent cached probe result for a camera"""
        async with self._lock:
            return self._probe_cache.get(camera_id)

    # Streaming

    async def start_stream(self, camera_id: int) -> bool:
        try:
            camera = await self.camera_repository.find_by_id(camera_id)
        except Exception as e:
            logger.error(f"Error starting stream for camera {camera_id}: {e}", exc_info=True)
            return False

        if camera is None or not camera.is_operational():
            logger.warning(f"Cannot start stream for camera {camera_id}: not found or not operational")
            return False

        configuration = camera.get_configuration()
        async with self._lock:
            if camera_id in self._active_streams:
                logger.info(f"Stream already active for camera {camera_id}")
                return True

            self._active_streams[camera_id] = StreamInfo(
                camera_id=camera_id,
                is_streaming=True,
                stream_url=self._stream_url(camera_id),
                current_frame_rate=configuration.frame_rate,
                current_width=configuration.resolution_width,
                current_height=configuration.resolution_height,
                started_at=utc_now(),
            )

        logger.info(f"Started stream for camera '{camera.name}' (ID: {camera_id})")
        return True

    async def stop_stream(self, camera_id: int, graceful: bool = True) -> bool:
        async with self._lock:
            stream_info = self._active_streams.pop(camera_id, None)

        if stream_info is None:
            logger.debug(f"No active stream found for camera {camera_id}")
            return True

        logger.info(
            f"Stopped stream for camera {camera_id} (graceful={graceful}). "
            f"Duration: {stream_info.duration_seconds:.1f} seconds"
        )
        return True

    async def is_streaming(self, camera_id: int) -> bool:
        async with self._lock:
            return camera_id in self._active_streams

    async def get_stream_info(self, camera_id: int) -> Optional[StreamInfo]:
        async with self._lock:
            return self._active_streams.get(camera_id)

    # Facial recognition

    async def has_active_facial_recognition(self, camera_id: int) -> bool:
        async with self._lock:
            return camera_id in self._active_recognition

    async def start_facial_recognition(self, camera_id: int) -> bool:
        try:
            camera = await self.camera_repository.find_by_id(camera_id)
        except Exception as e:
            logger.error(f"Error starting facial recognition for camera {camera_id}: {e}", exc_info=True)
            return False

        if camera is None or not camera.enable_facial_recognition or not camera.is_operational():
            logger.warning(
                f"Cannot start facial recognition for camera {camera_id}: not enabled or not operational"
            )
            return False

        async with self._lock:
            self._active_recognition.add(camera_id)
        logger.info(f"Started facial recognition for camera '{camera.name}' (ID: {camera_id})")
        return True

    async def stop_facial_recognition(self, camera_id: int) -> bool:
        async with self._lock:
            self._active_recognition.discard(camera_id)
        logger.info(f"Stopped facial recognition for camera {camera_id}")
        return True

    async def cancel_facial_recognition_tasks(self, camera_id: int) -> None:
        await self.stop_facial_recognition(camera_id)

    # Health monitoring

    async def perform_health_check(self, camera_id: int) -> HealthCheckResult:
        try:
            camera = await self.camera_repository.find_by_id(camera_id)
            if camera is None:
                return HealthCheckResult.unhealthy(camera_id, "Unknown", "Camera not found")

            probe = await self._probe_camera(camera)
            if probe.is_success:
                result = HealthCheckResult.healthy(camera_id, camera.name, probe.response_time_ms)
            else:
                result = HealthCheckResult.unhealthy(
                    camera_id,
                    camera.name,
                    "Connection failed",
                    CameraStatus.ERROR,
                    camera.failure_count + 1,
                    probe.response_time_ms,
                )
                result.details["connection_error"] = probe.error_message

            result.previous_status = camera.status
            return result
        except Exception as e:
            logger.error(f"Error performing health check for camera {camera_id}: {e}", exc_info=True)
            return HealthCheckResult.unhealthy(camera_id, "Unknown", f"Health check failed: {e}")

    async def perform_health_check_all(self) -> List[HealthCheckResult]:
        try:
            cameras = await self.camera_repository.find_active()
        except Exception as e:
            logger.error(f"Error performing health check on all cameras: {e}", exc_info=True)
            return []

        return list(await asyncio.gather(*(self.perform_health_check(camera.id) for camera in cameras)))

    async def update_camera_status(
        self,
        camera_id: int,
        status: CameraStatus,
        error_message: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> None:
        try:
            camera = await self.camera_repository.find_by_id(camera_id)
            if camera is None:
                logger.warning(f"Camera not found for status update: {camera_id}")
                return

            if not camera.update_status(status, error_message, user_id):
                logger.debug(f"Status {status.value} refused for deleted camera {camera_id}")
                return

            await self.camera_repository.save(camera)
            logger.debug(f"Updated camera {camera_id} status to {status.value}")
        except ConcurrencyConflictError:
            logger.warning(f"Camera {camera_id} changed during status update, skipping")
        except Exception as e:
            logger.error(f"Error updating camera status for camera {camera_id}: {e}", exc_info=True)

    # Resource management

    async def clear_cache(self, camera_id: int) -> None:
        async with self._lock:
            self._probe_cache.pop(camera_id, None)
        logger.debug(f"Cleared cache for camera {camera_id}")

    async def clear_all_caches(self) -> None:
        async with self._lock:
            self._probe_cache.clear()
        logger.debug("Cleared all camera caches")

    async def cleanup_file_system_resources(self, camera_id: int, permanent: bool = False) -> None:
        logger.info(f"Cleaned up file system resources for camera {camera_id} (permanent={permanent})")

    # Notifications and integration

    async def notify_camera_deletion(self, camera_id: int, permanent: bool) -> None:
        async with self._lock:
            self._active_streams.pop(camera_id, None)
            self._active_recognition.discard(camera_id)
            self._frame_captures.discard(camera_id)
        logger.info(f"Notified services about camera {camera_id} deletion (permanent={permanent})")

    async def update_monitoring_systems(self, camera_id: int, removed: bool = False) -> None:
        logger.debug(f"Updated monitoring systems for camera {camera_id} (removed={removed})")

    # Frame capture

    async def capture_frame(self, camera_id: int) -> Optional[bytes]:
        # Frames are produced by the capture host, nothing is buffered here
        logger.debug(f"No frame available for camera {camera_id}")
        return None

    async def start_frame_capture(self, camera_id: int) -> bool:
        async with self._lock:
            self._frame_captures.add(camera_id)
        logger.info(f"Started frame capture for camera {camera_id}")
        return True

    async def stop_frame_capture(self, camera_id: int) -> bool:
        async with self._lock:
            self._frame_captures.discard(camera_id)
        logger.info(f"Stopped frame capture for camera {camera_id}")
        return True

    async def is_capturing_frames(self, camera_id: int) -> bool:
        async with self._lock:
            return camera_id in self._frame_captures
