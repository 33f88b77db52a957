"""Persistence layer built on the async MongoDB driver."""

from .database import close_client, get_collection, init_client
from .memory import InMemoryRepository
from .repository import MongoRepository, Repository, parse_object_id

__all__ = [
    "init_client",
    "get_collection",
    "close_client",
    "Repository",
    "MongoRepository",
    "InMemoryRepository",
    "parse_object_id",
]
