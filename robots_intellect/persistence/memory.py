"""In-memory repository used when persistent storage is unavailable."""

from __future__ import annotations

from typing import Dict, Generic, List, Optional, Type

from bson import ObjectId

from .repository import T, parse_object_id


class InMemoryRepository(Generic[T]):
    """Simplistic repository that keeps documents in process memory.

    Entities are stored as copies so callers mutating a returned object do not
    change what is stored until they call :meth:`replace_one`.
    """

    def __init__(self, model: Type[T]) -> None:
        self.model = model
        self.documents: Dict[ObjectId, T] = {}

    async def list_all(self) -> List[T]:
        return [document.model_copy(deep=True) for document in self.documents.values()]

    async def find_by_id(self, document_id: str) -> Optional[T]:
        oid = parse_object_id(document_id)
        if oid is None or oid not in self.documents:
            return None
        return self.documents[oid].model_copy(deep=True)

    async def exists(self, document_id: str) -> bool:
        oid = parse_object_id(document_id)
        return oid is not None and oid in self.documents

    async def insert_one(self, document: T) -> T:
        oid = ObjectId()
        document.id = str(oid)
        self.documents[oid] = document.model_copy(deep=True)
        return document

    async def replace_one(self, document: T) -> None:
        oid = parse_object_id(document.id)
        if oid is None or oid not in self.documents:
            return
        self.documents[oid] = document.model_copy(deep=True)

    async def delete_by_id(self, document_id: str) -> None:
        oid = parse_object_id(document_id)
        if oid is not None:
            self.documents.pop(oid, None)

    async def ping(self) -> bool:
        return True
