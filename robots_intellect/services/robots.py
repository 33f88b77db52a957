"""Robot and lap-time operations."""

from __future__ import annotations

from typing import List, Optional

import structlog

from robots_intellect.enterprise.core import LapTime, Robot
from robots_intellect.observability.metrics import record_lap_time_capture, record_robot_mutation
from robots_intellect.observability.tracing import get_tracer
from robots_intellect.persistence import Repository

from .errors import BAD_REQUEST_BODY, ENTRY_NOT_FOUND, BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)
tracer = get_tracer(__name__)


class RobotService:
    """Validates requests and orchestrates repository calls for robots.

    Updates and lap-time captures read the document, change it in memory and
    replace it whole. There is no version check, so two concurrent writers to
    the same robot can overwrite each other; the last replace wins.
    """

    def __init__(self, repository: Repository[Robot]) -> None:
        self.repository = repository

    async def list_robots(self) -> List[Robot]:
        return await self.repository.list_all()

    async def get_robot(self, robot_id: str) -> Robot:
        robot = await self.repository.find_by_id(robot_id)
        if robot is None:
            raise NotFoundError(ENTRY_NOT_FOUND)
        return robot

    async def create_robot(self, robot: Optional[Robot]) -> Robot:
        if robot is None:
            raise BadRequestError("Empty request body")

        robot.id = None
        created = await self.repository.insert_one(robot)
        record_robot_mutation("create")
        logger.info("robot_created", robot_id=created.id)
        return created

    async def update_robot(self, robot_id: str, robot: Optional[Robot]) -> Robot:
        if robot is None:
            raise BadRequestError("Empty request body!")

        if not await self.repository.exists(robot_id):
            raise NotFoundError(ENTRY_NOT_FOUND)

        robot.id = robot_id
        await self.repository.replace_one(robot)
        record_robot_mutation("update")
        logger.info("robot_updated", robot_id=robot_id)
        return robot

    async def delete_robot(self, robot_id: str) -> Robot:
        robot = await self.get_robot(robot_id)
        await self.repository.delete_by_id(robot_id)
        record_robot_mutation("delete")
        logger.info("robot_deleted", robot_id=robot_id)
        return robot

    async def list_lap_times(self, robot_id: str) -> List[LapTime]:
        robot = await self.get_robot(robot_id)
        return robot.lap_times

    async def capture_lap_time(
        self,
        robot_id: str,
        round_number: int,
        lap_time: Optional[LapTime],
    ) -> LapTime:
        """Store the time for ``round_number``, replacing any earlier one.

        The round number in the path always overrides one sent in the body.
        """

        time = (lap_time or LapTime()).model_copy(update={"round_number": round_number})
        if not time.is_valid():
            raise BadRequestError(BAD_REQUEST_BODY)

        with tracer.start_as_current_span("capture_lap_time") as span:
            span.set_attribute("robot.id", robot_id)
            span.set_attribute("robot.round_number", round_number)

            robot = await self.get_robot(robot_id)
            replaced = any(existing.round_number == round_number for existing in robot.lap_times)
            robot.upsert_lap_time(time)
            await self.repository.replace_one(robot)

        record_lap_time_capture(replaced)
        logger.info(
            "lap_time_captured",
            robot_id=robot_id,
            round_number=round_number,
            time_elapsed_ms=time.time_elapsed_ms,
            replaced=replaced,
        )
        return time
