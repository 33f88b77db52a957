"""Robot and lap-time endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, ValidationError

from robots_intellect.enterprise.core import ADMIN_OR_REFEREE, SENSOR_ONLY
from robots_intellect.server.api.schemas.robots import (
    LapTimePayload,
    LapTimeSchema,
    RobotPayload,
    RobotSchema,
)
from robots_intellect.server.dependencies import get_robot_service
from robots_intellect.server.security import require_roles
from robots_intellect.services import BadRequestError, RobotService
from robots_intellect.services.errors import BAD_REQUEST_BODY

router = APIRouter(prefix="/robots", tags=["robots"])

PayloadT = TypeVar("PayloadT", bound=BaseModel)

_ENTRY_NOT_FOUND = {"description": "Entry not found"}
_BAD_REQUEST = {"description": "Empty or invalid request body"}
_AUTH_ERRORS = {
    status.HTTP_401_UNAUTHORIZED: {"description": "Missing or invalid bearer token"},
    status.HTTP_403_FORBIDDEN: {"description": "Caller lacks the required role"},
}


def _no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _json_body(schema: Type[BaseModel]) -> Dict[str, Any]:
    # Nested models are response schemas too, so they live in components.
    json_schema = schema.model_json_schema(by_alias=True, ref_template="#/components/schemas/{model}")
    json_schema.pop("$defs", None)
    return {
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": json_schema}},
        }
    }


async def _read_payload(request: Request, schema: Type[PayloadT]) -> Optional[PayloadT]:
    """Parse the JSON body of a guarded endpoint.

    Guarded endpoints read their body here rather than as a declared parameter,
    so the role guard has already run when a malformed body is rejected. An
    absent body or a JSON ``null`` yields ``None``.
    """

    body = (await request.body()).strip()
    if not body or body == b"null":
        return None
    try:
        return schema.model_validate_json(body)
    except ValidationError as exc:
        raise BadRequestError(BAD_REQUEST_BODY) from exc


@router.get(
    "",
    response_model=List[RobotSchema],
    responses={status.HTTP_204_NO_CONTENT: {"description": "No robots stored"}},
)
async def list_robots(
    service: RobotService = Depends(get_robot_service),
) -> Union[List[RobotSchema], Response]:
    robots = await service.list_robots()
    if not robots:
        return _no_content()
    return [RobotSchema.from_domain(robot) for robot in robots]


@router.get(
    "/{robot_id}",
    response_model=RobotSchema,
    responses={status.HTTP_404_NOT_FOUND: _ENTRY_NOT_FOUND},
)
async def get_robot(robot_id: str, service: RobotService = Depends(get_robot_service)) -> RobotSchema:
    return RobotSchema.from_domain(await service.get_robot(robot_id))


@router.post(
    "",
    response_model=RobotSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(ADMIN_OR_REFEREE))],
    responses={status.HTTP_400_BAD_REQUEST: _BAD_REQUEST, **_AUTH_ERRORS},
    openapi_extra=_json_body(RobotPayload),
)
async def create_robot(
    request: Request,
    response: Response,
    service: RobotService = Depends(get_robot_service),
) -> RobotSchema:
    payload = await _read_payload(request, RobotPayload)
    robot = await service.create_robot(payload.to_domain() if payload else None)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{robot.id}"
    return RobotSchema.from_domain(robot)


@router.put(
    "/{robot_id}",
    response_model=RobotSchema,
    dependencies=[Depends(require_roles(ADMIN_OR_REFEREE))],
    responses={
        status.HTTP_400_BAD_REQUEST: _BAD_REQUEST,
        status.HTTP_404_NOT_FOUND: _ENTRY_NOT_FOUND,
        **_AUTH_ERRORS,
    },
    openapi_extra=_json_body(RobotPayload),
)
async def update_robot(
    robot_id: str,
    request: Request,
    service: RobotService = Depends(get_robot_service),
) -> RobotSchema:
    payload = await _read_payload(request, RobotPayload)
    robot = await service.update_robot(robot_id, payload.to_domain() if payload else None)
    return RobotSchema.from_domain(robot)


@router.delete(
    "/{robot_id}",
    response_model=RobotSchema,
    dependencies=[Depends(require_roles(ADMIN_OR_REFEREE))],
    responses={status.HTTP_404_NOT_FOUND: _ENTRY_NOT_FOUND, **_AUTH_ERRORS},
)
async def delete_robot(robot_id: str, service: RobotService = Depends(get_robot_service)) -> RobotSchema:
    return RobotSchema.from_domain(await service.delete_robot(robot_id))


@router.get(
    "/{robot_id}/laptimes",
    response_model=List[LapTimeSchema],
    responses={
        status.HTTP_204_NO_CONTENT: {"description": "Robot has no lap times"},
        status.HTTP_404_NOT_FOUND: _ENTRY_NOT_FOUND,
    },
)
async def list_lap_times(
    robot_id: str,
    service: RobotService = Depends(get_robot_service),
) -> Union[List[LapTimeSchema], Response]:
    lap_times = await service.list_lap_times(robot_id)
    if not lap_times:
        return _no_content()
    return [LapTimeSchema.from_domain(item) for item in lap_times]


@router.put(
    "/{robot_id}/laptimes/{round_id}",
    response_model=LapTimeSchema,
    dependencies=[Depends(require_roles(SENSOR_ONLY))],
    responses={
        status.HTTP_400_BAD_REQUEST: _BAD_REQUEST,
        status.HTTP_404_NOT_FOUND: _ENTRY_NOT_FOUND,
        **_AUTH_ERRORS,
    },
    openapi_extra=_json_body(LapTimePayload),
)
async def capture_lap_time(
    robot_id: str,
    round_id: int,
    request: Request,
    service: RobotService = Depends(get_robot_service),
) -> LapTimeSchema:
    payload = await _read_payload(request, LapTimePayload)
    lap_time = await service.capture_lap_time(
        robot_id,
        round_id,
        payload.to_domain() if payload else None,
    )
    return LapTimeSchema.from_domain(lap_time)
