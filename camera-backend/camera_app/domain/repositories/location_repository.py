from abc import ABC, abstractmethod
from typing import Optional
from ..models.location import Location


class LocationRepository(ABC):
    """Repository interface - defines contract for location lookups"""

    @abstractmethod
    async def find_by_id(self, location_id: int) -> Optional[Location]:
        """Find location by ID"""
        pass
