"""Deterministic-when-seeded hourly series generator.

Stands in for a live provider. Each field has a generator that turns the
hour-of-day vector into realistic values; unknown fields get uniform noise.
"""

import math
import zlib
from datetime import datetime
from typing import Callable

import numpy as np
import pandas as pd

from region_colorizer.application.services.series_ops import to_utc
from region_colorizer.domain.entities import HourlySeries

_HOUR = pd.Timedelta(hours=1)

FieldGenerator = Callable[[np.ndarray, np.random.Generator], np.ndarray]

# Strategy pattern: map field ids to generators
_GENERATORS: dict[str, FieldGenerator] = {}


def _register_generator(field_id: str, generator: FieldGenerator) -> None:
    """Register a field generator."""
    _GENERATORS[field_id] = generator


def simulated_fields() -> list[str]:
    """Field ids with a dedicated generator."""
    return sorted(_GENERATORS)


def lookup_key(field_id: str, latitude: float, longitude: float, start: pd.Timestamp) -> str:
    """Centroid-based key used to derive per-call seeds."""
    return f"{field_id}|{latitude:.4f}|{longitude:.4f}|{start.isoformat()}"


def simulate_series(
    latitude: float,
    longitude: float,
    start: datetime,
    end: datetime,
    field_id: str,
    seed: int | None = None,
) -> HourlySeries:
    """Generate one sample per hour in [floor_hour(start), end), rounded to 2 decimals."""
    start_utc = to_utc(start).floor(_HOUR)
    end_utc = to_utc(end)
    hours = max(0, math.ceil((end_utc - start_utc) / _HOUR))

    times = pd.date_range(start=start_utc, periods=hours, freq=_HOUR)
    rng = _make_rng(seed, lookup_key(field_id, latitude, longitude, start_utc))
    hour_of_day = np.asarray(times.hour, dtype="float64")

    generator = _GENERATORS.get(field_id, _uniform)
    values = np.round(generator(hour_of_day, rng), 2) if hours else np.array([], dtype="float64")

    frame = pd.DataFrame({"time": times, field_id: values})
    return HourlySeries(latitude=latitude, longitude=longitude, frame=frame)


def _make_rng(seed: int | None, key: str) -> np.random.Generator:
    if seed is None:
        return np.random.default_rng()
    # crc32 is stable across processes, unlike hash()
    return np.random.default_rng(np.random.SeedSequence([seed, zlib.crc32(key.encode("utf-8"))]))


def _bounded_walk(
    n: int,
    rng: np.random.Generator,
    mean: float,
    sigma: float,
    low: float,
    high: float,
    reversion: float = 0.2,
) -> np.ndarray:
    """Mean-reverting random walk clipped to [low, high]."""
    values = np.empty(n, dtype="float64")
    current = mean + rng.uniform(-2 * sigma, 2 * sigma)
    for i in range(n):
        current += reversion * (mean - current) + rng.normal(0.0, sigma)
        current = min(max(current, low), high)
        values[i] = current
    return values


def _rush_hours(hour_of_day: np.ndarray) -> np.ndarray:
    """Two peaks, morning and evening commute, in [0, ~1]."""
    morning = np.exp(-((hour_of_day - 8.0) ** 2) / 4.0)
    evening = np.exp(-((hour_of_day - 17.5) ** 2) / 5.0)
    return morning + evening


def _temperature(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    # Diurnal sinusoid peaking mid-afternoon plus bounded noise
    return 15 + np.sin((hour_of_day - 9) / 24 * 2 * np.pi) * 10 + rng.uniform(0, 5, hour_of_day.size)


def _humidity(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return _bounded_walk(hour_of_day.size, rng, mean=65.0, sigma=4.0, low=20.0, high=100.0)


def _precipitation(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    n = hour_of_day.size
    bursts = rng.random(n) < 0.1
    return np.where(bursts, rng.uniform(0, 5, n), 0.0)


def _wind_speed(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return _bounded_walk(hour_of_day.size, rng, mean=12.0, sigma=2.0, low=0.0, high=40.0)


def _surface_pressure(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return _bounded_walk(hour_of_day.size, rng, mean=1013.0, sigma=1.5, low=980.0, high=1045.0)


def _congestion_level(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    noise = rng.normal(0, 5, hour_of_day.size)
    return np.clip(15 + 55 * _rush_hours(hour_of_day) + noise, 0, 100)


def _average_speed(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    noise = rng.normal(0, 4, hour_of_day.size)
    return np.clip(65 - 35 * _rush_hours(hour_of_day) + noise, 5, 130)


def _vehicle_count(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    noise = rng.normal(0, 80, hour_of_day.size)
    return np.clip(300 + 1500 * _rush_hours(hour_of_day) + noise, 0, None)


def _air_quality_index(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return _bounded_walk(hour_of_day.size, rng, mean=55.0, sigma=6.0, low=0.0, high=300.0)


def _noise_level(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    daytime = np.clip(np.sin(np.pi * (hour_of_day - 6) / 16), 0, 1)
    noise = rng.normal(0, 3, hour_of_day.size)
    return np.clip(40 + 20 * daytime + noise, 25, 110)


def _pm25(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return _bounded_walk(hour_of_day.size, rng, mean=14.0, sigma=2.0, low=0.0, high=200.0)


def _uniform(hour_of_day: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return rng.uniform(0, 100, hour_of_day.size)


_register_generator("temperature_2m", _temperature)
_register_generator("relative_humidity_2m", _humidity)
_register_generator("precipitation", _precipitation)
_register_generator("wind_speed_10m", _wind_speed)
_register_generator("surface_pressure", _surface_pressure)
_register_generator("congestion_level", _congestion_level)
_register_generator("average_speed", _average_speed)
_register_generator("vehicle_count", _vehicle_count)
_register_generator("air_quality_index", _air_quality_index)
_register_generator("noise_level", _noise_level)
_register_generator("pm25", _pm25)
