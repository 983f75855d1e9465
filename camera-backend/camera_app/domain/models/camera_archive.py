from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .camera import Camera


PERMANENT_DELETION_ARCHIVE_REASON = "Permanent deletion archive"


@dataclass
class CameraArchive:
    """Snapshot of a camera kept after it has been permanently deleted"""
    camera_id: int
    name: str
    camera_type: str
    location_id: Optional[int]
    configuration_json: Optional[str]
    created_on: Optional[datetime]
    deleted_on: datetime
    deleted_by: Optional[int]
    reason: Optional[str] = None
    archive_reason: str = PERMANENT_DELETION_ARCHIVE_REASON

    @classmethod
    def from_camera(
        cls,
        camera: Camera,
        deleted_by: Optional[int],
        deleted_on: datetime,
        reason: Optional[str] = None,
    ) -> "CameraArchive":
        return cls(
            camera_id=camera.id,
            name=camera.name,
            camera_type=camera.camera_type.value,
            location_id=camera.location_id,
            configuration_json=camera.configuration_json,
            created_on=camera.created_on,
            deleted_on=deleted_on,
            deleted_by=deleted_by,
            reason=reason,
        )
