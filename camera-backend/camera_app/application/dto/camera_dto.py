from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, FrozenSet

from pydantic import BaseModel, Field

from ...domain.models.camera_enums import CameraType, CameraStatus


class CameraConfigurationDto(BaseModel):
    """
    DTO for camera configuration input and output.

    Unset values (None, or 0 for the operational limits) are filled in by
    the use case: from the default template on create, from the stored
    configuration on update.
    """
    resolution_width: Optional[int] = None
    resolution_height: Optional[int] = None
    resolution_display: str = "Auto"
    frame_rate: Optional[int] = None
    quality: Optional[int] = None
    auto_start: Optional[bool] = None
    max_connections: int = 0
    connection_timeout_seconds: int = 0
    retry_interval_seconds: int = 0
    max_retry_attempts: int = 0
    enable_motion_detection: Optional[bool] = None
    motion_sensitivity: Optional[int] = None
    enable_recording: Optional[bool] = None
    recording_duration_minutes: Optional[int] = None
    enable_facial_recognition: Optional[bool] = None
    facial_recognition_threshold: Optional[int] = None
    extended_configuration: Optional[Dict[str, Any]] = None


class CameraCreateRequest(BaseModel):
    """DTO for camera creation request"""
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    camera_type: CameraType
    connection_string: str = Field(max_length=500)
    username: Optional[str] = Field(default=None, max_length=100)
    password: Optional[str] = None
    location_id: Optional[int] = None
    configuration: Optional[CameraConfigurationDto] = None
    enable_facial_recognition: bool = True
    priority: int = 5
    manufacturer: Optional[str] = Field(default=None, max_length=100)
    model: Optional[str] = Field(default=None, max_length=100)
    firmware_version: Optional[str] = Field(default=None, max_length=50)
    serial_number: Optional[str] = Field(default=None, max_length=100)
    metadata: Optional[str] = None
    created_by: int


class CameraUpdateRequest(BaseModel):
    """
    DTO for camera update request.

    password: None keeps the stored password, "" removes it, any other
    value replaces it.
    """
    id: int
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    camera_type: CameraType
    connection_string: str = Field(max_length=500)
    username: Optional[str] = Field(default=None, max_length=100)
    password: Optional[str] = None
    location_id: Optional[int] = None
    configuration: Optional[CameraConfigurationDto] = None
    enable_facial_recognition: bool = True
    priority: int = 5
    manufacturer: Optional[str] = Field(default=None, max_length=100)
    model: Optional[str] = Field(default=None, max_length=100)
    firmware_version: Optional[str] = Field(default=None, max_length=50)
    serial_number: Optional[str] = Field(default=None, max_length=100)
    metadata: Optional[str] = None
    is_active: bool = True
    modified_by: int


class CameraDeleteRequest(BaseModel):
    """DTO for camera deletion request"""
    id: int
    deleted_by: int
    deleter_roles: FrozenSet[str] = frozenset()
    deleter_permissions: FrozenSet[str] = frozenset()
    permanent_delete: bool = False
    deletion_reason: Optional[str] = Field(default=None, max_length=500)
    force_delete: bool = False


class CameraResponse(BaseModel):
    """DTO for camera response"""
    id: int
    name: str
    description: Optional[str] = None
    camera_type: CameraType
    camera_type_display: str = ""
    connection_string: str = ""  # Credentials masked
    username: Optional[str] = None
    status: CameraStatus
    status_display: str = ""
    location_id: Optional[int] = None
    location_name: Optional[str] = None
    configuration: Optional[CameraConfigurationDto] = None
    last_health_check: Optional[datetime] = None
    last_online_time: Optional[datetime] = None
    last_error_message: Optional[str] = None
    failure_count: int = 0
    enable_facial_recognition: bool = True
    priority: int = 5
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    firmware_version: Optional[str] = None
    serial_number: Optional[str] = None
    metadata: Optional[str] = None
    is_active: bool = True
    is_deleted: bool = False
    is_operational: bool = False
    is_available_for_streaming: bool = False
    display_name: str = ""
    minutes_since_last_health_check: Optional[int] = None
    minutes_since_last_online: Optional[int] = None
    created_on: Optional[datetime] = None
    modified_on: Optional[datetime] = None
    created_by_name: Optional[str] = None
    modified_by_name: Optional[str] = None


class DeleteOutcome(str, Enum):
    """How a delete request ended"""
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    ALREADY_DELETED = "already_deleted"
    VALIDATION_FAILED = "validation_failed"
    ARCHIVE_FAILED = "archive_failed"
    CONCURRENCY_CONFLICT = "concurrency_conflict"
    INTERNAL_ERROR = "internal_error"


class CameraDeleteResponse(BaseModel):
    """DTO for camera deletion outcome"""
    success: bool
    outcome: DeleteOutcome
    message: str
    errors: List[str] = Field(default_factory=list)


class CameraHealthResponse(BaseModel):
    """DTO for a single camera health check"""
    camera_id: int
    camera_name: str
    is_healthy: bool
    status: CameraStatus
    previous_status: Optional[CameraStatus] = None
    health_score: int
    failure_count: int = 0
    response_time_ms: int = 0
    error_message: Optional[str] = None
    is_recovery: bool = False
    is_new_failure: bool = False
    checked_at: datetime


class CameraHealthSummaryResponse(BaseModel):
    """DTO for a health sweep"""
    total: int = 0
    healthy: int = 0
    unhealthy: int = 0
    recoveries: int = 0
    new_failures: int = 0
    results: List[CameraHealthResponse] = Field(default_factory=list)
