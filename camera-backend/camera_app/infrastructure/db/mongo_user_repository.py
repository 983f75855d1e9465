# Standard library imports
from typing import Optional, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.constants import UserFields
from .mongo_connection import get_user_collection


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, user_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.user_collection = user_collection if user_collection is not None else get_user_collection()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Find user by ID

        Args:
            user_id: The user ID to find

        Returns:
            User domain model if found, None otherwise
        """
        if user_id is None:
            return None

        try:
            document = await self.user_collection.find_one({UserFields.MONGO_ID: user_id})
            if document is None:
                return None
            return self._document_to_user(document)
        except Exception as e:
            raise RuntimeError(f"Error finding user by ID: {str(e)}")

    def _document_to_user(self, document: Dict[str, Any]) -> User:
        return User(
            id=document[UserFields.MONGO_ID],
            first_name=document.get(UserFields.FIRST_NAME, ""),
            last_name=document.get(UserFields.LAST_NAME, ""),
            email=document.get(UserFields.EMAIL),
            is_active=document.get(UserFields.IS_ACTIVE, True),
        )
