"""
Unit tests for the MongoDB repositories, run against mocked Motor collections.
"""
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from camera_app.domain.exceptions import ConcurrencyConflictError
from camera_app.domain.models.camera import Camera
from camera_app.domain.models.camera_archive import CameraArchive
from camera_app.domain.models.camera_enums import CameraStatus, CameraType
from camera_app.infrastructure.db.mongo_audit_log_repository import MongoAuditLogRepository
from camera_app.infrastructure.db.mongo_camera_archive_repository import MongoCameraArchiveRepository
from camera_app.infrastructure.db.mongo_camera_repository import MongoCameraRepository, normalize_name
from camera_app.infrastructure.db.mongo_location_repository import MongoLocationRepository
from camera_app.infrastructure.db.mongo_system_configuration_repository import (
    MongoSystemConfigurationRepository,
)


class _Cursor:
    """Minimal async cursor returned by collection.find().sort()"""

    def __init__(self, documents):
        self._documents = list(documents)

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for document in self._documents:
            yield document


def _collection_with_documents(documents):
    collection = MagicMock()
    cursor = MagicMock()
    cursor.sort.return_value = _Cursor(documents)
    collection.find.return_value = cursor
    return collection


def _camera_document(**overrides):
    document = {
        "_id": 5,
        "name": "Yard",
        "normalized_name": "yard",
        "camera_type": "RTSP",
        "connection_string": "rtsp://yard",
        "status": "Active",
        "location_id": 2,
        "failure_count": 0,
        "priority": 5,
        "is_active": True,
        "is_deleted": False,
        "created_on": datetime(2024, 5, 1, 12, 0),
        "version": 3,
    }
    document.update(overrides)
    return document


class TestMongoCameraRepository:
    """Tests for MongoCameraRepository"""

    def test_normalize_name(self):
        assert normalize_name("  Front Door ") == "front door"
        assert normalize_name(None) == ""

    @pytest.mark.asyncio
    async def test_find_by_id_maps_document(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=_camera_document())
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())

        camera = await repo.find_by_id(5)

        assert camera.id == 5
        assert camera.camera_type == CameraType.RTSP
        assert camera.status == CameraStatus.ACTIVE
        assert camera.version == 3
        assert camera.created_on.tzinfo is not None
        collection.find_one.assert_awaited_once_with({"_id": 5})

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())
        assert await repo.find_by_id(5) is None

    @pytest.mark.asyncio
    async def test_find_by_id_wraps_driver_errors(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(side_effect=Exception("server selection timeout"))
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())
        with pytest.raises(RuntimeError, match="Error finding camera by ID: server selection timeout"):
            await repo.find_by_id(5)

    @pytest.mark.asyncio
    async def test_name_lookup_uses_normalized_name(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())

        await repo.find_by_name_and_location(" Yard ", 2, exclude_id=5)

        collection.find_one.assert_awaited_once_with({
            "normalized_name": "yard",
            "location_id": 2,
            "is_deleted": False,
            "_id": {"$ne": 5},
        })

    @pytest.mark.asyncio
    async def test_search_builds_query(self):
        collection = _collection_with_documents([_camera_document(), _camera_document(_id=6, name="Yard 2")])
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())

        cameras = await repo.search(search_term="ya.d", camera_type=CameraType.RTSP, location_id=2)

        assert [c.id for c in cameras] == [5, 6]
        query = collection.find.call_args[0][0]
        assert query["is_deleted"] is False
        assert query["is_active"] is True
        assert query["camera_type"] == "RTSP"
        assert query["location_id"] == 2
        assert {"name": {"$regex": r"ya\.d", "$options": "i"}} in query["$or"]
        assert "status" not in query

    @pytest.mark.asyncio
    async def test_insert_assigns_sequence_id(self):
        collection = MagicMock()
        collection.insert_one = AsyncMock()
        counters = MagicMock()
        counters.find_one_and_update = AsyncMock(return_value={"_id": "cameras", "seq": 12})
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=counters)
        camera = Camera(id=None, name="Gate", camera_type=CameraType.IP, connection_string="http://gate")

        saved = await repo.save(camera)

        assert saved.id == 12
        assert saved.version == 1
        args, kwargs = collection.find_one_and_replace.call_args
        assert args[0] == {"camera_id": 5}
        assert kwargs["upsert"] is True
        document = args[1]
        assert document["_id"] == 12
        assert document["normalized_name"] == "gate"
        assert document["camera_type"] == "IP"
        assert document["status"] == "Inactive"

    @pytest.mark.asyncio
    async def test_update_is_conditional_on_version(self):
        collection = MagicMock()
        collection.update_one = AsyncMock(return_value=SimpleNamespace(matched_count=1))
        collection.find_one = AsyncMock(return_value=_camera_document(version=4))
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())
        camera = Camera(
            id=5, name="Yard", camera_type=CameraType.RTSP, connection_string="rtsp://yard", version=3
        )

        saved = await repo.save(camera)

        assert saved.version == 4
        filter_doc, update_doc = collection.update_one.call_args[0]
        assert filter_doc == {"_id": 5, "version": 3}
        assert update_doc["$set"]["version"] == 4
        assert "_id" not in update_doc["$set"]

    @pytest.mark.asyncio
    async def test_stale_update_raises_conflict(self):
        collection = MagicMock()
        collection.update_one = AsyncMock(return_value=SimpleNamespace(matched_count=0))
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())
        camera = Camera(id=5, name="Yard", camera_type=CameraType.RTSP, connection_string="rtsp://yard", version=2)

        with pytest.raises(ConcurrencyConflictError):
            await repo.save(camera)

    @pytest.mark.asyncio
    async def test_remove(self):
        collection = MagicMock()
        collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=1))
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())
        camera = Camera(id=5, name="Yard", camera_type=CameraType.RTSP, connection_string="rtsp://yard", version=3)

        await repo.remove(camera)

        collection.delete_one.assert_awaited_once_with({"_id": 5, "version": 3})

    @pytest.mark.asyncio
    async def test_remove_stale_raises_conflict(self):
        collection = MagicMock()
        collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=0))
        repo = MongoCameraRepository(camera_collection=collection, counter_collection=MagicMock())
        camera = Camera(id=5, name="Yard", camera_type=CameraType.RTSP, connection_string="rtsp://yard", version=3)

        with pytest.raises(ConcurrencyConflictError):
            await repo.remove(camera)


class TestSupportingRepositories:
    """Tests for the lookup repositories used by deletion and views"""

    @pytest.mark.asyncio
    async def test_location_lookup(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value={"_id": 2, "name": "Parking", "is_active": False})
        location = await MongoLocationRepository(location_collection=collection).find_by_id(2)
        assert location.name == "Parking"
        assert location.is_active is False

    @pytest.mark.asyncio
    async def test_audit_log_existence(self):
        collection = MagicMock()
        collection.count_documents = AsyncMock(return_value=1)
        repo = MongoAuditLogRepository(audit_log_collection=collection)

        assert await repo.exists_for_entity("Camera", 5) is True
        collection.count_documents.assert_awaited_once_with(
            {"entity_name": "Camera", "entity_id": 5}, limit=1
        )

    @pytest.mark.asyncio
    async def test_archive_upserts_by_camera_id(self):
        collection = MagicMock()
        collection.find_one_and_replace = AsyncMock(return_value={"_id": "665f0c2a", "camera_id": 5})
        repo = MongoCameraArchiveRepository(archive_collection=collection)
        record = CameraArchive(
            camera_id=5,
            name="Yard",
            camera_type="RTSP",
            location_id=2,
            configuration_json=None,
            created_on=None,
            deleted_on=datetime(2024, 6, 1, tzinfo=timezone.utc),
            deleted_by=7,
        )

        assert await repo.archive(record) == "665f0c2a"
        args, kwargs = collection.find_one_and_replace.call_args
        assert args[0] == {"camera_id": 5}
        assert kwargs["upsert"] is True
        document = args[1]
        assert document["camera_id"] == 5
        assert document["archive_reason"] == "Permanent deletion archive"

    @pytest.mark.asyncio
    async def test_archive_failure_wrapped(self):
        collection = MagicMock()
        collection.find_one_and_replace = AsyncMock(side_effect=Exception("not primary"))
        repo = MongoCameraArchiveRepository(archive_collection=collection)
        record = CameraArchive(
            camera_id=5, name="Yard", camera_type="RTSP", location_id=None,
            configuration_json=None, created_on=None,
            deleted_on=datetime(2024, 6, 1, tzinfo=timezone.utc), deleted_by=7,
        )
        with pytest.raises(RuntimeError, match="Error archiving camera"):
            await repo.archive(record)

    @pytest.mark.asyncio
    async def test_configuration_reference(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)
        repo = MongoSystemConfigurationRepository(configuration_collection=collection)
        assert await repo.references_camera(5) is False
