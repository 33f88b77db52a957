"""Domain models for the Robots Intellect API.

Robots are stored as schema-flexible documents: beyond the identifier and the
lap times, any field a client sends is carried through untouched. Lap times
only exist embedded inside their robot.
"""

from __future__ import annotations

import enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Role(str, enum.Enum):
    """Roles an identity may carry in its token claims."""

    ADMIN = "Admin"
    REFEREE = "Referee"
    SENSOR = "Sensor"

    @classmethod
    def parse(cls, value: str) -> Optional["Role"]:
        """Return the role matching ``value`` case-insensitively, if any."""

        for role in cls:
            if role.value.lower() == value.strip().lower():
                return role
        return None


ADMIN_OR_REFEREE: FrozenSet[Role] = frozenset({Role.ADMIN, Role.REFEREE})
SENSOR_ONLY: FrozenSet[Role] = frozenset({Role.SENSOR})


class DocumentModel(BaseModel):
    """Base for documents exchanged as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class LapTime(DocumentModel):
    """Elapsed time recorded for one round."""

    model_config = ConfigDict(extra="ignore")

    round_number: int = Field(0, description="Round this time belongs to.")
    time_elapsed_ms: int = Field(0, description="Lap duration in milliseconds.")

    def is_valid(self) -> bool:
        return self.round_number >= 1 and self.time_elapsed_ms >= 1


class Robot(DocumentModel):
    """A competing robot and the lap times captured for it."""

    id: Optional[str] = Field(None, description="Store-assigned hex identifier.")
    name: Optional[str] = None
    lap_times: List[LapTime] = Field(default_factory=list)

    @field_validator("lap_times", mode="before")
    @classmethod
    def _default_lap_times(cls, value):
        # Documents written before the first capture have no lap times.
        return [] if value is None else value

    def upsert_lap_time(self, lap_time: LapTime) -> LapTime:
        """Store ``lap_time``, dropping any entry for the same round first.

        The new entry is always appended, so a replaced round moves to the end
        of the list.
        """

        self.lap_times = [
            existing
            for existing in self.lap_times
            if existing.round_number != lap_time.round_number
        ]
        self.lap_times.append(lap_time)
        return lap_time
