from .camera_dto import (
    CameraConfigurationDto,
    CameraCreateRequest,
    CameraUpdateRequest,
    CameraDeleteRequest,
    CameraResponse,
    CameraDeleteResponse,
    DeleteOutcome,
    CameraHealthResponse,
    CameraHealthSummaryResponse,
)

__all__ = [
    "CameraConfigurationDto",
    "CameraCreateRequest",
    "CameraUpdateRequest",
    "CameraDeleteRequest",
    "CameraResponse",
    "CameraDeleteResponse",
    "DeleteOutcome",
    "CameraHealthResponse",
    "CameraHealthSummaryResponse",
]
