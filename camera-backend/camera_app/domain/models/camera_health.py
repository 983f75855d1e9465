# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple

# Local application imports
from .camera_enums import CameraStatus


HEALTHY_SCORE_THRESHOLD = 70
MAX_FAILURE_PENALTY = 30
FAILURE_PENALTY_PER_FAILURE = 5

STATUS_PENALTIES: Dict[CameraStatus, int] = {
    CameraStatus.ACTIVE: 0,
    CameraStatus.CONNECTING: 20,
    CameraStatus.DISCONNECTED: 40,
    CameraStatus.MAINTENANCE: 30,
    CameraStatus.ERROR: 60,
    CameraStatus.INACTIVE: 80,
}
UNKNOWN_STATUS_PENALTY = 50


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def latency_penalty(response_time_ms: int) -> int:
    """
    Penalty for slow responses.

    Bands are mutually exclusive: (1000, 5000] -> 10, (5000, 10000] -> 20,
    above 10000 -> 30.
    """
    if response_time_ms > 10000:
        return 30
    if response_time_ms > 5000:
        return 20
    if response_time_ms > 1000:
        return 10
    return 0


def calculate_health_score(
    status: Optional[CameraStatus],
    failure_count: int,
    response_time_ms: int,
) -> Tuple[int, bool]:
    """
    Turn raw health signals into a 0-100 score and a verdict

    Args:
        status: Observed camera status (None or unrecognized -> unknown penalty)
        failure_count: Consecutive failure count
        response_time_ms: Probe response time in milliseconds

    Returns:
        (health_score, is_healthy) where healthy means score >= 70
    """
    score = 100
    score -= STATUS_PENALTIES.get(status, UNKNOWN_STATUS_PENALTY)
    score -= min(max(failure_count, 0) * FAILURE_PENALTY_PER_FAILURE, MAX_FAILURE_PENALTY)
    score -= latency_penalty(response_time_ms)

    health_score = max(0, min(100, score))
    return health_score, health_score >= HEALTHY_SCORE_THRESHOLD


@dataclass
class ConnectionTestResult:
    """Outcome of a single connection attempt against a camera"""
    is_success: bool
    status: CameraStatus
    error_message: Optional[str] = None
    response_time_ms: int = 0
    tested_at: datetime = field(default_factory=_utc_now)
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, response_time_ms: int = 0) -> "ConnectionTestResult":
        return cls(is_success=True, status=CameraStatus.ACTIVE, response_time_ms=response_time_ms)

    @classmethod
    def failure(
        cls,
        error_message: str,
        status: CameraStatus = CameraStatus.ERROR,
    ) -> "ConnectionTestResult":
        return cls(is_success=False, status=status, error_message=error_message)


@dataclass
class StreamInfo:
    """State of a camera stream session"""
    camera_id: int
    is_streaming: bool
    stream_url: Optional[str] = None
    current_frame_rate: Optional[int] = None
    current_width: Optional[int] = None
    current_height: Optional[int] = None
    active_connections: int = 0
    started_at: Optional[datetime] = None
    quality_score: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration_seconds(self) -> float:
        """Seconds since the stream started (0 when never started)"""
        if self.started_at is None:
            return 0.0
        return (_utc_now() - self.started_at).total_seconds()


@dataclass
class HealthCheckResult:
    """
    Result of a camera health check.

    Use the healthy()/unhealthy() constructors, which score the result
    before returning it. Call calculate_health_score() after changing
    status, failure_count or response_time_ms on an existing result.
    """
    camera_id: int
    camera_name: str
    status: CameraStatus
    is_healthy: bool = False
    previous_status: Optional[CameraStatus] = None
    error_message: Optional[str] = None
    response_time_ms: int = 0
    checked_at: datetime = field(default_factory=_utc_now)
    failure_count: int = 0
    health_score: int = 0
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.calculate_health_score()

    @property
    def is_recovery(self) -> bool:
        return self.previous_status == CameraStatus.ERROR and self.status == CameraStatus.ACTIVE

    @property
    def is_new_failure(self) -> bool:
        return self.previous_status == CameraStatus.ACTIVE and self.status == CameraStatus.ERROR

    def calculate_health_score(self) -> None:
        self.health_score, self.is_healthy = calculate_health_score(
            self.status, self.failure_count, self.response_time_ms
        )

    @classmethod
    def healthy(cls, camera_id: int, camera_name: str, response_time_ms: int = 0) -> "HealthCheckResult":
        return cls(
            camera_id=camera_id,
            camera_name=camera_name,
            status=CameraStatus.ACTIVE,
            response_time_ms=response_time_ms,
            failure_count=0,
        )

    @classmethod
    def unhealthy(
        cls,
        camera_id: int,
        camera_name: str,
        error_message: str,
        status: CameraStatus = CameraStatus.ERROR,
        failure_count: int = 1,
        response_time_ms: int = 0,
    ) -> "HealthCheckResult":
        return cls(
            camera_id=camera_id,
            camera_name=camera_name,
            status=status,
            error_message=error_message,
            failure_count=failure_count,
            response_time_ms=response_time_ms,
        )
