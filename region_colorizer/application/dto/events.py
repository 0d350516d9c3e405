"""Collaborator event DTOs."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from region_colorizer.domain.entities import TimeWindow


class TimeWindowChangedEvent(BaseModel):
    """Window selection emitted by the timeline collaborator."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start_position: int = Field(alias="startPosition", ge=0)  # hour offset on the timeline
    end_position: int = Field(alias="endPosition", ge=0)
    start_instant: datetime = Field(alias="startInstant")
    end_instant: datetime = Field(alias="endInstant")

    @model_validator(mode="after")
    def _check_order(self) -> "TimeWindowChangedEvent":
        if self.end_position < self.start_position:
            raise ValueError(
                f"endPosition {self.end_position} before startPosition {self.start_position}"
            )
        if self.end_instant < self.start_instant:
            raise ValueError("endInstant before startInstant")
        return self

    def to_window(self) -> TimeWindow:
        """Time window value for the registry."""
        return TimeWindow.between(self.start_instant, self.end_instant)
