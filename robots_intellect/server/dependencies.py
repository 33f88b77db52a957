"""Dependency providers for the API layer."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends

from robots_intellect.enterprise.config.settings import AppSettings, get_settings
from robots_intellect.enterprise.core import Robot
from robots_intellect.persistence import InMemoryRepository, MongoRepository, Repository, get_collection
from robots_intellect.services import RobotService

__all__ = [
    "get_app_settings",
    "get_repository",
    "get_robot_service",
    "reset_repository",
]


_memory_repo: Optional[InMemoryRepository[Robot]] = None


def get_app_settings() -> AppSettings:
    return get_settings()


def get_repository(settings: AppSettings = Depends(get_app_settings)) -> Repository[Robot]:
    """Return the robots repository for the configured store.

    Falls back to a process-wide in-memory repository when the database is
    disabled.
    """

    if settings.database.enabled:
        collection = get_collection(settings.database.robots_collection)
        return MongoRepository(collection, Robot)

    global _memory_repo
    if _memory_repo is None:
        _memory_repo = InMemoryRepository(Robot)
    return _memory_repo


def get_robot_service(repository: Repository[Robot] = Depends(get_repository)) -> RobotService:
    return RobotService(repository)


def reset_repository() -> None:
    """Drop the in-memory repository (useful for tests)."""

    global _memory_repo
    _memory_repo = None
