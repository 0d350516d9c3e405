"""Shared test fixtures."""

import math
from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from region_colorizer.domain.entities import HourlySeries
from region_colorizer.domain.ports import ClockPort, SeriesProviderPort
from region_colorizer.infrastructure.config.data_sources import default_data_sources

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

SQUARE = [
    (37.7849, -122.4094),
    (37.7849, -122.3994),
    (37.7749, -122.3994),
    (37.7749, -122.4094),
]


class FixedClock(ClockPort):
    """Clock frozen at a known instant."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def isoformat(self, ts: datetime) -> str:
        return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_series(
    start: datetime,
    values: list[float | None],
    field_id: str = "temperature_2m",
    latitude: float = 0.0,
    longitude: float = 0.0,
) -> HourlySeries:
    """Hourly series whose first sample is at `start`."""
    times = pd.date_range(start=pd.Timestamp(start), periods=len(values), freq=pd.Timedelta(hours=1))
    frame = pd.DataFrame({"time": times, field_id: pd.Series(values, dtype="float64")})
    return HourlySeries(latitude=latitude, longitude=longitude, frame=frame)


class StubProvider(SeriesProviderPort):
    """Returns a prepared series or raises a prepared error, recording calls."""

    def __init__(self, series: HourlySeries | None = None, error: Exception | None = None) -> None:
        self.series = series
        self.error = error
        self.calls: list[tuple] = []

    async def get_series(self, latitude, longitude, start, end, field_id):
        self.calls.append((latitude, longitude, start, end, field_id))
        if self.error is not None:
            raise self.error
        return self.series


class ConstantProvider(SeriesProviderPort):
    """One sample per hour over the requested window, with a fixed value per field."""

    def __init__(self, values: dict[str, float] | None = None) -> None:
        self.values = dict(values or {})
        self.calls: list[tuple] = []

    async def get_series(self, latitude, longitude, start, end, field_id):
        self.calls.append((latitude, longitude, start, end, field_id))
        hours = max(1, math.ceil((end - start) / timedelta(hours=1)))
        value = self.values.get(field_id)
        return make_series(start, [value] * hours, field_id, latitude, longitude)


@pytest.fixture
def clock():
    """Create fixed clock."""
    return FixedClock()


@pytest.fixture
def data_sources():
    """Create default data source catalogue."""
    return default_data_sources()


@pytest.fixture
def weather_source(data_sources):
    """Weather source with Cold/Mild/Hot rules."""
    return data_sources[0]


@pytest.fixture
def square():
    """Four-vertex polygon around downtown San Francisco."""
    return list(SQUARE)


@pytest.fixture
def series_factory():
    """Factory for hourly series."""
    return make_series


@pytest.fixture
def stub_provider_factory():
    """Factory for stub providers."""
    return StubProvider


@pytest.fixture
def constant_provider_factory():
    """Factory for constant-value providers."""
    return ConstantProvider
