# Standard library imports
import logging
from typing import List

# Local application imports
from ....domain.models.camera_health import HealthCheckResult
from ...dto.camera_dto import CameraHealthResponse, CameraHealthSummaryResponse
from ...services.camera_service import CameraService
from .side_effects import run_best_effort

logger = logging.getLogger(__name__)


def to_health_response(result: HealthCheckResult) -> CameraHealthResponse:
    return CameraHealthResponse(
        camera_id=result.camera_id,
        camera_name=result.camera_name,
        is_healthy=result.is_healthy,
        status=result.status,
        previous_status=result.previous_status,
        health_score=result.health_score,
        failure_count=result.failure_count,
        response_time_ms=result.response_time_ms,
        error_message=result.error_message,
        is_recovery=result.is_recovery,
        is_new_failure=result.is_new_failure,
        checked_at=result.checked_at,
    )


class CheckCameraHealthUseCase:
    """
    Use case run by the periodic health monitor.

    Checks one camera or every active camera through the camera service and
    records the observed status on each checked camera.
    """

    def __init__(self, camera_service: CameraService) -> None:
        self.camera_service = camera_service

    async def _record(self, result: HealthCheckResult) -> None:
        # previous_status is only known when the camera was loaded
        if result.previous_status is None:
            return
        await run_best_effort(
            f"recording health status of camera {result.camera_id}",
            lambda: self.camera_service.update_camera_status(
                result.camera_id, result.status, result.error_message
            ),
        )
        if result.is_recovery:
            logger.info(f"Camera {result.camera_id} '{result.camera_name}' recovered")
        elif result.is_new_failure:
            logger.warning(
                f"Camera {result.camera_id} '{result.camera_name}' went down: {result.error_message}"
            )

    async def execute(self, camera_id: int) -> CameraHealthResponse:
        """
        Health check a single camera

        Args:
            camera_id: ID of the camera

        Returns:
            CameraHealthResponse with the scored result
        """
        result = await self.camera_service.perform_health_check(camera_id)
        await self._record(result)
        return to_health_response(result)

    async def execute_all(self) -> CameraHealthSummaryResponse:
        """
        Health check every active, non-deleted camera

        Returns:
            CameraHealthSummaryResponse with per-camera results and totals
        """
        results: List[HealthCheckResult] = await self.camera_service.perform_health_check_all()
        for result in results:
            await self._record(result)

        summary = CameraHealthSummaryResponse(
            total=len(results),
            healthy=sum(1 for r in results if r.is_healthy),
            unhealthy=sum(1 for r in results if not r.is_healthy),
            recoveries=sum(1 for r in results if r.is_recovery),
            new_failures=sum(1 for r in results if r.is_new_failure),
            results=[to_health_response(r) for r in results],
        )
        logger.info(
            f"Health sweep finished: {summary.healthy}/{summary.total} healthy, "
            f"{summary.recoveries} recovered, {summary.new_failures} new failures"
        )
        return summary
