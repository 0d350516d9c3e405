"""Weather archive response DTOs."""

import pandas as pd
from pydantic import BaseModel, ConfigDict, model_validator

from region_colorizer.domain.entities import HourlySeries


class HourlyBlock(BaseModel):
    """`hourly` section: a `time` column plus one list per requested field."""

    model_config = ConfigDict(extra="allow")

    time: list[str]

    @model_validator(mode="after")
    def _check_columns(self) -> "HourlyBlock":
        for name, values in (self.model_extra or {}).items():
            if not isinstance(values, list):
                raise ValueError(f"hourly.{name} must be a list")
            if len(values) != len(self.time):
                raise ValueError(
                    f"hourly.{name} has {len(values)} values for {len(self.time)} timestamps"
                )
        return self

    def columns(self) -> dict[str, list[float | None]]:
        return dict(self.model_extra or {})


class ArchiveResponse(BaseModel):
    """Weather archive API response."""

    latitude: float
    longitude: float
    utc_offset_seconds: int = 0
    hourly: HourlyBlock

    def to_series(self) -> HourlySeries:
        """Convert to an hourly series with UTC timestamps.

        Times come back in the location's local zone (`timezone=auto`);
        the UTC offset is subtracted to get UTC.
        """
        local_times = pd.to_datetime(pd.Series(self.hourly.time, dtype="object"))
        times = (local_times - pd.Timedelta(seconds=self.utc_offset_seconds)).dt.tz_localize("UTC")

        frame = pd.DataFrame({"time": times})
        for name, values in self.hourly.columns().items():
            frame[name] = pd.to_numeric(pd.Series(values, dtype="object"), errors="coerce")

        return HourlySeries(latitude=self.latitude, longitude=self.longitude, frame=frame)
