"""Repository contract and its MongoDB implementation."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Mapping, Optional, Protocol, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from robots_intellect.enterprise.core.models import DocumentModel

T = TypeVar("T", bound=DocumentModel)


def parse_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Return ``value`` as an :class:`ObjectId`, or ``None`` when malformed."""

    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class Repository(Protocol[T]):
    """Persistence operations over one collection of documents.

    Identifiers are the store's hex strings. A malformed identifier behaves
    like one that matches nothing.
    """

    async def list_all(self) -> List[T]: ...

    async def find_by_id(self, document_id: str) -> Optional[T]: ...

    async def exists(self, document_id: str) -> bool: ...

    async def insert_one(self, document: T) -> T: ...

    async def replace_one(self, document: T) -> None: ...

    async def delete_by_id(self, document_id: str) -> None: ...

    async def ping(self) -> bool: ...


class MongoRepository(Generic[T]):
    """:class:`Repository` backed by a MongoDB collection."""

    def __init__(self, collection: AsyncCollection[Mapping[str, Any]], model: Type[T]) -> None:
        self.collection = collection
        self.model = model

    def _to_model(self, document: Mapping[str, Any]) -> T:
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return self.model.model_validate(data)

    def _to_document(self, entity: T) -> Dict[str, Any]:
        document = entity.model_dump(by_alias=True, exclude={"id"})
        document.pop("_id", None)
        return document

    async def list_all(self) -> List[T]:
        return [self._to_model(document) async for document in self.collection.find({})]

    async def find_by_id(self, document_id: str) -> Optional[T]:
        oid = parse_object_id(document_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid})
        if document is None:
            return None
        return self._to_model(document)

    async def exists(self, document_id: str) -> bool:
        oid = parse_object_id(document_id)
        if oid is None:
            return False
        return await self.collection.count_documents({"_id": oid}, limit=1) > 0

    async def insert_one(self, document: T) -> T:
        result = await self.collection.insert_one(self._to_document(document))
        document.id = str(result.inserted_id)
        return document

    async def replace_one(self, document: T) -> None:
        oid = parse_object_id(document.id)
        if oid is None:
            return
        await self.collection.replace_one({"_id": oid}, self._to_document(document))

    async def delete_by_id(self, document_id: str) -> None:
        oid = parse_object_id(document_id)
        if oid is None:
            return
        await self.collection.delete_one({"_id": oid})

    async def ping(self) -> bool:
        try:
            await self.collection.database.command("ping")
        except PyMongoError:
            return False
        return True
