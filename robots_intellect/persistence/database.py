"""MongoDB client and collection management."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from robots_intellect.enterprise.config.settings import AppSettings, get_settings

logger = structlog.get_logger(__name__)

_client: Optional[AsyncMongoClient] = None
_database_name: Optional[str] = None


def init_client(settings: Optional[AppSettings] = None) -> AsyncMongoClient:
    """Initialise (or return existing) async MongoDB client."""

    global _client, _database_name
    if _client is not None:
        return _client

    config = settings or get_settings()
    db = config.database
    if not db.enabled:
        raise RuntimeError("Database usage is disabled by configuration.")
    _client = AsyncMongoClient(
        db.url,
        serverSelectionTimeoutMS=db.server_selection_timeout_ms,
    )
    _database_name = db.name
    logger.info("mongo_client_created", database=db.name)
    return _client


def get_collection(name: str) -> AsyncCollection[Mapping[str, Any]]:
    client = init_client()
    assert _database_name is not None
    return client[_database_name][name]


async def close_client() -> None:
    global _client, _database_name
    if _client is None:
        return
    await _client.close()
    _client = None
    _database_name = None
    logger.info("mongo_client_closed")
