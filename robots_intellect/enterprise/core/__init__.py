"""Core domain package for the Robots Intellect API."""

from .models import (
    ADMIN_OR_REFEREE,
    SENSOR_ONLY,
    LapTime,
    Robot,
    Role,
)

__all__ = [
    "ADMIN_OR_REFEREE",
    "SENSOR_ONLY",
    "LapTime",
    "Robot",
    "Role",
]
