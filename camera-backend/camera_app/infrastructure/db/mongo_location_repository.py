# Standard library imports
from typing import Optional, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection

# Local application imports
from ...domain.repositories.location_repository import LocationRepository
from ...domain.models.location import Location
from ...domain.constants import LocationFields
from .mongo_connection import get_location_collection


class MongoLocationRepository(LocationRepository):
    """MongoDB implementation of LocationRepository"""

    def __init__(self, location_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.location_collection = (
            location_collection if location_collection is not None else get_location_collection()
        )

    async def find_by_id(self, location_id: int) -> Optional[Location]:
        if location_id is None:
            return None

        try:
            document = await self.location_collection.find_one({LocationFields.MONGO_ID: location_id})
            if document is None:
                return None
            return self._document_to_location(document)
        except Exception as e:
            raise RuntimeError(f"Error finding location by ID: {str(e)}")

    def _document_to_location(self, document: Dict[str, Any]) -> Location:
        return Location(
            id=document[LocationFields.MONGO_ID],
            name=document.get(LocationFields.NAME, ""),
            is_active=document.get(LocationFields.IS_ACTIVE, True),
        )
