from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from robots_intellect.enterprise.core import LapTime, Robot
from robots_intellect.persistence import InMemoryRepository, MongoRepository, parse_object_id
from robots_intellect.server.api.schemas.robots import RobotPayload
from robots_intellect.services import RobotService


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(str(oid)) == oid
    assert parse_object_id("1234") is None
    assert parse_object_id("") is None
    assert parse_object_id(None) is None


@pytest.mark.asyncio
async def test_memory_repository_returns_copies():
    repository = InMemoryRepository(Robot)
    robot = await repository.insert_one(Robot(name="Bender"))

    loaded = await repository.find_by_id(robot.id)
    loaded.lap_times.append(LapTime(round_number=1, time_elapsed_ms=500))

    assert (await repository.find_by_id(robot.id)).lap_times == []
    await repository.replace_one(loaded)
    assert len((await repository.find_by_id(robot.id)).lap_times) == 1


@pytest.mark.asyncio
async def test_memory_repository_crud():
    repository = InMemoryRepository(Robot)
    robot = await repository.insert_one(Robot(name="Bender", team="Planet Express"))

    assert await repository.exists(robot.id)
    assert not await repository.exists("bogus")
    assert [item.id for item in await repository.list_all()] == [robot.id]

    await repository.delete_by_id(robot.id)
    await repository.delete_by_id("bogus")
    assert await repository.list_all() == []
    assert await repository.ping()


@pytest.mark.asyncio
async def test_mongo_repository_maps_documents():
    oid = ObjectId()
    collection = MagicMock()
    collection.find_one = AsyncMock(
        return_value={"_id": oid, "name": "Bender", "lapTimes": None, "team": "Planet Express"}
    )
    repository = MongoRepository(collection, Robot)

    robot = await repository.find_by_id(str(oid))

    collection.find_one.assert_awaited_once_with({"_id": oid})
    assert robot.id == str(oid)
    assert robot.lap_times == []
    assert robot.model_extra == {"team": "Planet Express"}


@pytest.mark.asyncio
async def test_mongo_repository_insert_and_replace():
    oid = ObjectId()
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))
    collection.replace_one = AsyncMock()
    repository = MongoRepository(collection, Robot)

    robot = await repository.insert_one(Robot(name="Bender"))
    assert robot.id == str(oid)
    collection.insert_one.assert_awaited_once_with({"name": "Bender", "lapTimes": []})

    robot.lap_times.append(LapTime(round_number=1, time_elapsed_ms=500))
    await repository.replace_one(robot)
    collection.replace_one.assert_awaited_once_with(
        {"_id": oid},
        {"name": "Bender", "lapTimes": [{"roundNumber": 1, "timeElapsedMs": 500}]},
    )


@pytest.mark.asyncio
async def test_mongo_repository_skips_store_for_malformed_ids():
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.count_documents = AsyncMock()
    collection.delete_one = AsyncMock()
    repository = MongoRepository(collection, Robot)

    assert await repository.find_by_id("not-an-id") is None
    assert await repository.exists("not-an-id") is False
    await repository.delete_by_id("not-an-id")

    collection.find_one.assert_not_awaited()
    collection.count_documents.assert_not_awaited()
    collection.delete_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_client_supplied_mongo_id_never_reaches_the_store():
    assigned = ObjectId()
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=assigned))
    collection.count_documents = AsyncMock(return_value=1)
    collection.replace_one = AsyncMock()
    service = RobotService(MongoRepository(collection, Robot))

    created = await service.create_robot(
        RobotPayload.model_validate({"_id": "hijack", "name": "Bender"}).to_domain()
    )

    assert created.id == str(assigned)
    collection.insert_one.assert_awaited_once_with({"name": "Bender", "lapTimes": []})

    await service.update_robot(
        created.id,
        RobotPayload.model_validate({"_id": str(ObjectId()), "name": "Flexo"}).to_domain(),
    )

    collection.replace_one.assert_awaited_once_with({"_id": assigned}, {"name": "Flexo", "lapTimes": []})


@pytest.mark.asyncio
async def test_mongo_document_drops_stray_id_extra():
    collection = MagicMock()
    collection.replace_one = AsyncMock()
    repository = MongoRepository(collection, Robot)
    oid = ObjectId()

    await repository.replace_one(Robot.model_validate({"id": str(oid), "name": "Bender", "_id": "other"}))

    collection.replace_one.assert_awaited_once_with({"_id": oid}, {"name": "Bender", "lapTimes": []})
