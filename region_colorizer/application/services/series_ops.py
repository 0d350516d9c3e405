"""Window reduction over hourly series."""

from datetime import datetime

import pandas as pd

from region_colorizer.domain.entities import HourlySeries


def to_utc(ts: datetime | pd.Timestamp) -> pd.Timestamp:
    """Normalize a timestamp to tz-aware UTC. Naive values are taken as UTC."""
    stamp = pd.Timestamp(ts)
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def window_samples(
    series: HourlySeries,
    field_id: str,
    window_start: datetime,
    window_end: datetime,
) -> pd.Series:
    """Non-null samples with window_start <= t <= window_end (both inclusive)."""
    if not series.has_field(field_id) or series.frame.empty:
        return pd.Series(dtype="float64")

    frame = series.frame
    times = pd.to_datetime(frame["time"], utc=True)
    mask = (times >= to_utc(window_start)) & (times <= to_utc(window_end))
    values = pd.to_numeric(frame.loc[mask, field_id], errors="coerce")
    return values.dropna()


def reduce_series(
    series: HourlySeries,
    field_id: str,
    window_start: datetime,
    window_end: datetime,
) -> float | None:
    """Mean of the samples inside the window, or None when no sample qualifies.

    Single-hour and multi-hour windows use the same reduction; they only
    differ in how many samples fall inside the window.
    """
    values = window_samples(series, field_id, window_start, window_end)
    if values.empty:
        return None
    return float(values.mean())
