from abc import ABC, abstractmethod


class AuditLogRepository(ABC):
    """Repository interface - read access to the audit trail"""

    @abstractmethod
    async def exists_for_entity(self, entity_name: str, entity_id: int) -> bool:
        """Whether any audit log entry references the given entity"""
        pass
