"""Service layer for the Robots Intellect API."""

from .errors import BadRequestError, NotFoundError, ServiceError
from .robots import RobotService

__all__ = [
    "BadRequestError",
    "NotFoundError",
    "RobotService",
    "ServiceError",
]
