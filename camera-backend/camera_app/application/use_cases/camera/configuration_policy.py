"""
Configuration policies for camera create and update.

A new camera fills gaps from the global default template, an updated camera
fills gaps from its own stored configuration.
"""
# Standard library imports
import copy
from typing import Optional

# Local application imports
from ....domain.models.camera_configuration import CameraConfiguration
from ...dto.camera_dto import CameraConfigurationDto


def build_configuration_for_create(dto: Optional[CameraConfigurationDto]) -> CameraConfiguration:
    """
    Configuration for a new camera

    Missing values and non-positive operational limits come from
    CameraConfiguration.default().
    """
    default = CameraConfiguration.default()
    if dto is None:
        return default

    return CameraConfiguration(
        resolution_width=dto.resolution_width if dto.resolution_width is not None else default.resolution_width,
        resolution_height=dto.resolution_height if dto.resolution_height is not None else default.resolution_height,
        frame_rate=dto.frame_rate if dto.frame_rate is not None else default.frame_rate,
        quality=dto.quality if dto.quality is not None else default.quality,
        auto_start=dto.auto_start if dto.auto_start is not None else default.auto_start,
        max_connections=dto.max_connections if dto.max_connections > 0 else default.max_connections,
        connection_timeout_seconds=(
            dto.connection_timeout_seconds if dto.connection_timeout_seconds > 0
            else default.connection_timeout_seconds
        ),
        retry_interval_seconds=(
            dto.retry_interval_seconds if dto.retry_interval_seconds > 0
            else default.retry_interval_seconds
        ),
        max_retry_attempts=dto.max_retry_attempts if dto.max_retry_attempts > 0 else default.max_retry_attempts,
        enable_motion_detection=(
            dto.enable_motion_detection if dto.enable_motion_detection is not None
            else default.enable_motion_detection
        ),
        motion_sensitivity=dto.motion_sensitivity,
        enable_recording=dto.enable_recording if dto.enable_recording is not None else default.enable_recording,
        recording_duration_minutes=dto.recording_duration_minutes,
        enable_facial_recognition=(
            dto.enable_facial_recognition if dto.enable_facial_recognition is not None
            else default.enable_facial_recognition
        ),
        facial_recognition_threshold=(
            dto.facial_recognition_threshold if dto.facial_recognition_threshold is not None
            else default.facial_recognition_threshold
        ),
        extended_configuration=dto.extended_configuration,
    )


def merge_configuration_for_update(
    existing: CameraConfiguration,
    dto: Optional[CameraConfigurationDto],
) -> CameraConfiguration:
    """
    Configuration for an updated camera

    Missing values and non-positive operational limits keep the camera's
    stored value, never the global default.
    """
    if dto is None:
        return copy.deepcopy(existing)

    return CameraConfiguration(
        resolution_width=dto.resolution_width if dto.resolution_width is not None else existing.resolution_width,
        resolution_height=dto.resolution_height if dto.resolution_height is not None else existing.resolution_height,
        frame_rate=dto.frame_rate if dto.frame_rate is not None else existing.frame_rate,
        quality=dto.quality if dto.quality is not None else existing.quality,
        auto_start=dto.auto_start if dto.auto_start is not None else existing.auto_start,
        max_connections=dto.max_connections if dto.max_connections > 0 else existing.max_connections,
        connection_timeout_seconds=(
            dto.connection_timeout_seconds if dto.connection_timeout_seconds > 0
            else existing.connection_timeout_seconds
        ),
        retry_interval_seconds=(
            dto.retry_interval_seconds if dto.retry_interval_seconds > 0
            else existing.retry_interval_seconds
        ),
        max_retry_attempts=dto.max_retry_attempts if dto.max_retry_attempts > 0 else existing.max_retry_attempts,
        enable_motion_detection=(
            dto.enable_motion_detection if dto.enable_motion_detection is not None
            else existing.enable_motion_detection
        ),
        motion_sensitivity=dto.motion_sensitivity if dto.motion_sensitivity is not None else existing.motion_sensitivity,
        enable_recording=dto.enable_recording if dto.enable_recording is not None else existing.enable_recording,
        recording_duration_minutes=(
            dto.recording_duration_minutes if dto.recording_duration_minutes is not None
            else existing.recording_duration_minutes
        ),
        enable_facial_recognition=(
            dto.enable_facial_recognition if dto.enable_facial_recognition is not None
            else existing.enable_facial_recognition
        ),
        facial_recognition_threshold=(
            dto.facial_recognition_threshold if dto.facial_recognition_threshold is not None
            else existing.facial_recognition_threshold
        ),
        extended_configuration=(
            dto.extended_configuration if dto.extended_configuration is not None
            else copy.deepcopy(existing.extended_configuration)
        ),
    )
