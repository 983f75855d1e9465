# Standard library imports
import logging
import re
from typing import Optional, List, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument

# Local application imports
from ...domain.repositories.camera_repository import CameraRepository
from ...domain.models.camera import Camera
from ...domain.models.camera_enums import CameraStatus, CameraType
from ...domain.constants import CameraFields, CounterFields
from ...domain.exceptions import ConcurrencyConflictError
from ...utils.datetime_utils import ensure_utc
from .mongo_connection import get_camera_collection, get_counter_collection

logger = logging.getLogger(__name__)


CAMERA_SEQUENCE_NAME = "cameras"
SEARCHABLE_FIELDS = (
    CameraFields.NAME,
    CameraFields.DESCRIPTION,
    CameraFields.MANUFACTURER,
    CameraFields.MODEL,
    CameraFields.SERIAL_NUMBER,
)


def normalize_name(name: str) -> str:
    """Key used for case-insensitive name uniqueness"""
    return (name or "").strip().lower()


class MongoCameraRepository(CameraRepository):
    """
    MongoDB implementation of CameraRepository.

    Cameras use integer ids (stored as _id) drawn from the counters
    collection. Every write after the insert is conditional on the
    document's version field.
    """

    def __init__(
        self,
        camera_collection: Optional[AsyncIOMotorCollection] = None,
        counter_collection: Optional[AsyncIOMotorCollection] = None,
    ) -> None:
        self.camera_collection = camera_collection if camera_collection is not None else get_camera_collection()
        self.counter_collection = counter_collection if counter_collection is not None else get_counter_collection()

    async def _next_id(self) -> int:
        counter = await self.counter_collection.find_one_and_update(
            {CounterFields.MONGO_ID: CAMERA_SEQUENCE_NAME},
            {"$inc": {CounterFields.SEQUENCE: 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter[CounterFields.SEQUENCE])

    async def _find_many(self, query: Dict[str, Any]) -> List[Camera]:
        cursor = self.camera_collection.find(query).sort(
            [(CameraFields.PRIORITY, ASCENDING), (CameraFields.NAME, ASCENDING)]
        )
        cameras = []
        async for document in cursor:
            cameras.append(self._document_to_camera(document))
        return cameras

    async def find_by_id(self, camera_id: int) -> Optional[Camera]:
        """
        Find camera by ID

        Args:
            camera_id: The camera ID to find

        Returns:
            Camera domain model if found (deleted or not), None otherwise
        """
        if camera_id is None:
            return None

        try:
            document = await self.camera_collection.find_one({CameraFields.MONGO_ID: camera_id})
            if document is None:
                return None
            return self._document_to_camera(document)
        except Exception as e:
            raise RuntimeError(f"Error finding camera by ID: {str(e)}")

    async def find_by_name_and_location(
        self,
        name: str,
        location_id: Optional[int],
        exclude_id: Optional[int] = None,
    ) -> Optional[Camera]:
        query: Dict[str, Any] = {
            CameraFields.NORMALIZED_NAME: normalize_name(name),
            CameraFields.LOCATION_ID: location_id,
            CameraFields.IS_DELETED: False,
        }
        if exclude_id is not None:
            query[CameraFields.MONGO_ID] = {"$ne": exclude_id}

        try:
            document = await self.camera_collection.find_one(query)
            if document is None:
                return None
            return self._document_to_camera(document)
        except Exception as e:
            raise RuntimeError(f"Error finding camera by name: {str(e)}")

    async def find_by_location(self, location_id: int, include_deleted: bool = False) -> List[Camera]:
        query: Dict[str, Any] = {CameraFields.LOCATION_ID: location_id}
        if not include_deleted:
            query[CameraFields.IS_DELETED] = False

        try:
            return await self._find_many(query)
        except Exception as e:
            raise RuntimeError(f"Error listing cameras for location: {str(e)}")

    async def find_by_user(self, user_id: int) -> List[Camera]:
        try:
            return await self._find_many({CameraFields.CREATED_BY: user_id, CameraFields.IS_DELETED: False})
        except Exception as e:
            raise RuntimeError(f"Error listing cameras for user: {str(e)}")

    async def find_active(self) -> List[Camera]:
        try:
            return await self._find_many({CameraFields.IS_ACTIVE: True, CameraFields.IS_DELETED: False})
        except Exception as e:
            raise RuntimeError(f"Error listing active cameras: {str(e)}")

    async def search(
        self,
        search_term: Optional[str] = None,
        camera_type: Optional[CameraType] = None,
        status: Optional[CameraStatus] = None,
        location_id: Optional[int] = None,
        include_inactive: bool = False,
        include_deleted: bool = False,
    ) -> List[Camera]:
        query: Dict[str, Any] = {}
        if not include_deleted:
            query[CameraFields.IS_DELETED] = False
        if not include_inactive:
            query[CameraFields.IS_ACTIVE] = True
        if camera_type is not None:
            query[CameraFields.CAMERA_TYPE] = CameraType(camera_type).value
        if status is not None:
            query[CameraFields.STATUS] = CameraStatus(status).value
        if location_id is not None:
            query[CameraFields.LOCATION_ID] = location_id
        if search_term:
            pattern = {"$regex": re.escape(search_term), "$options": "i"}
            query["$or"] = [{field: pattern} for field in SEARCHABLE_FIELDS]

        try:
            return await self._find_many(query)
        except Exception as e:
            raise RuntimeError(f"Error searching cameras: {str(e)}")

    async def save(self, camera: Camera) -> Camera:
        """
        Save camera (create new or update existing)

        Args:
            camera: Camera domain model to save

        Returns:
            Saved Camera domain model with ID and version set

        Raises:
            ConcurrencyConflictError: If the stored version no longer matches
        """
        if not camera:
            raise ValueError("Camera cannot be None")

        try:
            if camera.id is None:
                camera.id = await self._next_id()
                camera.version = 1
                await self.camera_collection.insert_one(self._camera_to_dict(camera))
                logger.debug(f"Inserted camera {camera.id}")
                return camera

            camera_dict = self._camera_to_dict(camera)
            del camera_dict[CameraFields.MONGO_ID]
            camera_dict[CameraFields.VERSION] = camera.version + 1

            update_result = await self.camera_collection.update_one(
                {CameraFields.MONGO_ID: camera.id, CameraFields.VERSION: camera.version},
                {"$set": camera_dict},
            )
            if update_result.matched_count == 0:
                raise ConcurrencyConflictError()

            updated_document = await self.camera_collection.find_one({CameraFields.MONGO_ID: camera.id})
            if updated_document is None:
                raise ConcurrencyConflictError()
            return self._document_to_camera(updated_document)
        except (ValueError, ConcurrencyConflictError):
            raise
        except Exception as e:
            raise RuntimeError(f"Error saving camera: {str(e)}")

    async def remove(self, camera: Camera) -> None:
        """
        Permanently remove camera

        Raises:
            ConcurrencyConflictError: If the camera changed or vanished since it was loaded
        """
        try:
            delete_result = await self.camera_collection.delete_one(
                {CameraFields.MONGO_ID: camera.id, CameraFields.VERSION: camera.version}
            )
            if delete_result.deleted_count == 0:
                raise ConcurrencyConflictError()
            logger.debug(f"Removed camera {camera.id}")
        except ConcurrencyConflictError:
            raise
        except Exception as e:
            raise RuntimeError(f"Error removing camera: {str(e)}")

    def _document_to_camera(self, document: Dict[str, Any]) -> Camera:
        """
        Convert MongoDB document to Camera domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            Camera domain model
        """
        if not document:
            raise ValueError("Invalid document: document is None or empty")

        return Camera(
            id=document[CameraFields.MONGO_ID],
            name=document.get(CameraFields.NAME, ""),
            camera_type=document.get(CameraFields.CAMERA_TYPE, CameraType.IP.value),
            connection_string=document.get(CameraFields.CONNECTION_STRING, ""),
            description=document.get(CameraFields.DESCRIPTION),
            username=document.get(CameraFields.USERNAME),
            password=document.get(CameraFields.PASSWORD),
            status=document.get(CameraFields.STATUS, CameraStatus.INACTIVE.value),
            location_id=document.get(CameraFields.LOCATION_ID),
            configuration_json=document.get(CameraFields.CONFIGURATION_JSON),
            last_health_check=ensure_utc(document.get(CameraFields.LAST_HEALTH_CHECK)),
            last_online_time=ensure_utc(document.get(CameraFields.LAST_ONLINE_TIME)),
            last_error_message=document.get(CameraFields.LAST_ERROR_MESSAGE),
            failure_count=document.get(CameraFields.FAILURE_COUNT, 0),
            enable_facial_recognition=document.get(CameraFields.ENABLE_FACIAL_RECOGNITION, True),
            priority=document.get(CameraFields.PRIORITY, 5),
            manufacturer=document.get(CameraFields.MANUFACTURER),
            model=document.get(CameraFields.MODEL),
            firmware_version=document.get(CameraFields.FIRMWARE_VERSION),
            serial_number=document.get(CameraFields.SERIAL_NUMBER),
            metadata=document.get(CameraFields.METADATA),
            is_active=document.get(CameraFields.IS_ACTIVE, True),
            is_deleted=document.get(CameraFields.IS_DELETED, False),
            created_by=document.get(CameraFields.CREATED_BY),
            created_on=ensure_utc(document.get(CameraFields.CREATED_ON)),
            modified_by=document.get(CameraFields.MODIFIED_BY),
            modified_on=ensure_utc(document.get(CameraFields.MODIFIED_ON)),
            deleted_by=document.get(CameraFields.DELETED_BY),
            deleted_on=ensure_utc(document.get(CameraFields.DELETED_ON)),
            version=document.get(CameraFields.VERSION, 0),
        )

    def _camera_to_dict(self, camera: Camera) -> Dict[str, Any]:
        """
        Convert Camera domain model to MongoDB document

        Args:
            camera: Camera domain model

        Returns:
            Dictionary ready for MongoDB storage
        """
        return {
            CameraFields.MONGO_ID: camera.id,
            CameraFields.NAME: camera.name,
            CameraFields.NORMALIZED_NAME: normalize_name(camera.name),
            CameraFields.CAMERA_TYPE: camera.camera_type.value,
            CameraFields.CONNECTION_STRING: camera.connection_string,
            CameraFields.DESCRIPTION: camera.description,
            CameraFields.USERNAME: camera.username,
            CameraFields.PASSWORD: camera.password,
            CameraFields.STATUS: camera.status.value,
            CameraFields.LOCATION_ID: camera.location_id,
            CameraFields.CONFIGURATION_JSON: camera.configuration_json,
            CameraFields.LAST_HEALTH_CHECK: camera.last_health_check,
            CameraFields.LAST_ONLINE_TIME: camera.last_online_time,
            CameraFields.LAST_ERROR_MESSAGE: camera.last_error_message,
            CameraFields.FAILURE_COUNT: camera.failure_count,
            CameraFields.ENABLE_FACIAL_RECOGNITION: camera.enable_facial_recognition,
            CameraFields.PRIORITY: camera.priority,
            CameraFields.MANUFACTURER: camera.manufacturer,
            CameraFields.MODEL: camera.model,
            CameraFields.FIRMWARE_VERSION: camera.firmware_version,
            CameraFields.SERIAL_NUMBER: camera.serial_number,
            CameraFields.METADATA: camera.metadata,
            CameraFields.IS_ACTIVE: camera.is_active,
            CameraFields.IS_DELETED: camera.is_deleted,
            CameraFields.CREATED_BY: camera.created_by,
            CameraFields.CREATED_ON: camera.created_on,
            CameraFields.MODIFIED_BY: camera.modified_by,
            CameraFields.MODIFIED_ON: camera.modified_on,
            CameraFields.DELETED_BY: camera.deleted_by,
            CameraFields.DELETED_ON: camera.deleted_on,
            CameraFields.VERSION: camera.version,
        }
