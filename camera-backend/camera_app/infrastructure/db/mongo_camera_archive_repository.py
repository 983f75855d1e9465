# Standard library imports
from typing import Optional, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

# Local application imports
from ...domain.repositories.camera_archive_repository import CameraArchiveRepository
from ...domain.models.camera_archive import CameraArchive
from ...domain.constants import CameraArchiveFields
from .mongo_connection import get_camera_archive_collection


class MongoCameraArchiveRepository(CameraArchiveRepository):
    """MongoDB implementation of CameraArchiveRepository"""

    def __init__(self, archive_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.archive_collection = (
            archive_collection if archive_collection is not None else get_camera_archive_collection()
        )

    async def archive(self, record: CameraArchive) -> str:
        """
        Store the archive snapshot for a camera, replacing any earlier one

        Keyed on camera_id, so there is at most one record per camera.

        Args:
            record: Snapshot of the camera about to be destroyed

        Returns:
            String form of the archive document's ObjectId
        """
        try:
            document = await self.archive_collection.find_one_and_replace(
                {CameraArchiveFields.CAMERA_ID: record.camera_id},
                self._archive_to_dict(record),
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
            return str(document["_id"])
        except Exception as e:
            raise RuntimeError(f"Error archiving camera: {str(e)}")

    def _archive_to_dict(self, record: CameraArchive) -> Dict[str, Any]:
        return {
            CameraArchiveFields.CAMERA_ID: record.camera_id,
            CameraArchiveFields.NAME: record.name,
            CameraArchiveFields.CAMERA_TYPE: record.camera_type,
            CameraArchiveFields.LOCATION_ID: record.location_id,
            CameraArchiveFields.CONFIGURATION_JSON: record.configuration_json,
            CameraArchiveFields.CREATED_ON: record.created_on,
            CameraArchiveFields.DELETED_ON: record.deleted_on,
            CameraArchiveFields.DELETED_BY: record.deleted_by,
            CameraArchiveFields.REASON: record.reason,
            CameraArchiveFields.ARCHIVE_REASON: record.archive_reason,
        }
