# Standard library imports
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection

# Local application imports
from ...domain.repositories.system_configuration_repository import SystemConfigurationRepository
from ...domain.constants import SystemConfigurationFields
from .mongo_connection import get_system_configuration_collection


class MongoSystemConfigurationRepository(SystemConfigurationRepository):
    """
    MongoDB implementation of SystemConfigurationRepository.

    A configuration entry references a camera when its camera_ids array
    contains the camera id.
    """

    def __init__(self, configuration_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.configuration_collection = (
            configuration_collection if configuration_collection is not None
            else get_system_configuration_collection()
        )

    async def references_camera(self, camera_id: int) -> bool:
        try:
            document = await self.configuration_collection.find_one(
                {SystemConfigurationFields.CAMERA_IDS: camera_id},
                {SystemConfigurationFields.KEY: 1},
            )
            return document is not None
        except Exception as e:
            raise RuntimeError(f"Error checking configuration references: {str(e)}")
