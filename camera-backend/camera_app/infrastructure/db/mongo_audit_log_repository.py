# Standard library imports
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection

# Local application imports
from ...domain.repositories.audit_log_repository import AuditLogRepository
from ...domain.constants import AuditLogFields
from .mongo_connection import get_audit_log_collection


class MongoAuditLogRepository(AuditLogRepository):
    """MongoDB implementation of AuditLogRepository"""

    def __init__(self, audit_log_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.audit_log_collection = (
            audit_log_collection if audit_log_collection is not None else get_audit_log_collection()
        )

    async def exists_for_entity(self, entity_name: str, entity_id: int) -> bool:
        try:
            count = await self.audit_log_collection.count_documents(
                {AuditLogFields.ENTITY_NAME: entity_name, AuditLogFields.ENTITY_ID: entity_id},
                limit=1,
            )
            return count > 0
        except Exception as e:
            raise RuntimeError(f"Error checking audit logs: {str(e)}")
