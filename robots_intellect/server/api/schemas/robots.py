"""Pydantic schemas for the robots API.

Field names travel as camelCase on the wire; unknown robot fields are kept
and passed through to storage.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from robots_intellect.enterprise.core import LapTime, Robot


class CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LapTimeSchema(CamelSchema):
    round_number: int
    time_elapsed_ms: int

    @classmethod
    def from_domain(cls, lap_time: LapTime) -> "LapTimeSchema":
        return cls(round_number=lap_time.round_number, time_elapsed_ms=lap_time.time_elapsed_ms)


class LapTimePayload(CamelSchema):
    """Body of a lap-time capture; the round number comes from the path."""

    round_number: Optional[int] = None
    time_elapsed_ms: int = 0

    def to_domain(self) -> LapTime:
        return LapTime(round_number=self.round_number or 0, time_elapsed_ms=self.time_elapsed_ms)


class RobotPayload(CamelSchema):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    lap_times: Optional[List[LapTimeSchema]] = None

    def to_domain(self) -> Robot:
        # The store owns "_id"; it is never taken from the client.
        extra = {key: value for key, value in (self.model_extra or {}).items() if key != "_id"}
        robot = Robot(id=self.id, name=self.name, **extra)
        for item in self.lap_times or []:
            robot.upsert_lap_time(
                LapTime(round_number=item.round_number, time_elapsed_ms=item.time_elapsed_ms)
            )
        return robot


class RobotSchema(CamelSchema):
    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None
    lap_times: List[LapTimeSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, robot: Robot) -> "RobotSchema":
        return cls(
            id=robot.id,
            name=robot.name,
            lap_times=[LapTimeSchema.from_domain(item) for item in robot.lap_times],
            **dict(robot.model_extra or {}),
        )


class HealthSchema(BaseModel):
    status: str
