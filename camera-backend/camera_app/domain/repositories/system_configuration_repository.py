from abc import ABC, abstractmethod


class SystemConfigurationRepository(ABC):
    """Repository interface - system settings that may point at cameras"""

    @abstractmethod
    async def references_camera(self, camera_id: int) -> bool:
        """Whether any system configuration entry references the camera"""
        pass
