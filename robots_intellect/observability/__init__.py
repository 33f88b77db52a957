"""Observability utilities for structured logging, metrics, and tracing."""

from .logging import configure_logging
from .metrics import metrics_registry, record_lap_time_capture, record_robot_mutation
from .tracing import configure_tracer

__all__ = [
    "configure_logging",
    "configure_tracer",
    "metrics_registry",
    "record_lap_time_capture",
    "record_robot_mutation",
]
