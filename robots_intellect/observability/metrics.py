"""Prometheus metrics utilities."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter

metrics_registry = CollectorRegistry()

REQUEST_COUNTER = Counter(
    "robots_intellect_api_requests_total",
    "Total number of API requests handled",
    registry=metrics_registry,
)

ROBOT_MUTATION_COUNTER = Counter(
    "robots_intellect_robot_mutations_total",
    "Robot documents created, updated or deleted",
    ["operation"],
    registry=metrics_registry,
)

LAP_TIME_CAPTURE_COUNTER = Counter(
    "robots_intellect_lap_times_captured_total",
    "Lap times captured, split by whether an earlier time for the round was replaced",
    ["replaced"],
    registry=metrics_registry,
)


def record_robot_mutation(operation: str) -> None:
    ROBOT_MUTATION_COUNTER.labels(operation=operation).inc()


def record_lap_time_capture(replaced: bool) -> None:
    """Count a captured lap time."""

    LAP_TIME_CAPTURE_COUNTER.labels(replaced=str(replaced).lower()).inc()
