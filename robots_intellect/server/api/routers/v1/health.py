"""Liveness and readiness probes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from robots_intellect.enterprise.core import Robot
from robots_intellect.persistence import Repository
from robots_intellect.server.api.schemas.robots import HealthSchema
from robots_intellect.server.dependencies import get_repository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", response_model=HealthSchema)
async def live() -> HealthSchema:
    return HealthSchema(status="ok")


@router.get("/ready", response_model=HealthSchema)
async def ready(repository: Repository[Robot] = Depends(get_repository)):
    if not await repository.ping():
        return JSONResponse(
            {"status": "unavailable"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return HealthSchema(status="ready")
