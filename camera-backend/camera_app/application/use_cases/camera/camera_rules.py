# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....domain.exceptions import CameraValidationError
from ....domain.repositories.camera_repository import CameraRepository
from ....domain.repositories.location_repository import LocationRepository

logger = logging.getLogger(__name__)


async def ensure_unique_name(
    camera_repository: CameraRepository,
    name: str,
    location_id: Optional[int],
    exclude_id: Optional[int] = None,
) -> None:
    """
    Reject a name already used by another non-deleted camera in the same location

    Raises:
        CameraValidationError: If the name is taken
    """
    existing = await camera_repository.find_by_name_and_location(name, location_id, exclude_id=exclude_id)
    if existing is None:
        return

    where = f" in location {location_id}" if location_id is not None else ""
    prefix = "Another camera" if exclude_id is not None else "A camera"
    raise CameraValidationError(f"{prefix} with name '{name}'{where} already exists.")


async def ensure_location_active(location_repository: LocationRepository, location_id: Optional[int]) -> None:
    """
    Reject a location id that does not point at an active location

    Raises:
        CameraValidationError: If the location is missing or inactive
    """
    if location_id is None:
        return

    location = await location_repository.find_by_id(location_id)
    if location is None or not location.is_active:
        raise CameraValidationError(f"Location with ID {location_id} does not exist or is inactive.")


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Trim free text, turning blank values into None"""
    if value is None:
        return None
    return value.strip() or None
