"""Versioned API routers."""

from .health import router as health
from .robots import router as robots

__all__ = ["health", "robots"]
