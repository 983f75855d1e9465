# Standard library imports
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection

# Local application imports
from ...core.config import get_settings


# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = get_settings()
    _mongo_client = AsyncIOMotorClient(settings.mongo_uri)
    _mongo_database = _mongo_client[settings.mongo_database_name]
    return _mongo_database


def close_database() -> None:
    """Close the shared client so the next get_database() reconnects"""
    global _mongo_client, _mongo_database

    if _mongo_client is not None:
        _mongo_client.close()
    _mongo_client = None
    _mongo_database = None


def get_camera_collection() -> AsyncIOMotorCollection:
    """
    Get cameras collection from MongoDB

    Returns:
        MongoDB collection for cameras
    """
    return get_database()["cameras"]


def get_location_collection() -> AsyncIOMotorCollection:
    return get_database()["locations"]


def get_user_collection() -> AsyncIOMotorCollection:
    return get_database()["users"]


def get_audit_log_collection() -> AsyncIOMotorCollection:
    return get_database()["audit_logs"]


def get_camera_archive_collection() -> AsyncIOMotorCollection:
    """
    Get camera archive collection from MongoDB

    Returns:
        MongoDB collection holding snapshots of permanently deleted cameras
    """
    return get_database()["camera_archives"]


def get_system_configuration_collection() -> AsyncIOMotorCollection:
    return get_database()["system_configurations"]


def get_counter_collection() -> AsyncIOMotorCollection:
    """
    Get counters collection from MongoDB

    Returns:
        MongoDB collection with one sequence document per id space
    """
    return get_database()["counters"]
