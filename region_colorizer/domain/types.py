"""Domain types and aliases."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, TypedDict

import pandas as pd

Timestamp = datetime
SeriesFrame = pd.DataFrame

# (latitude, longitude) in degrees
LatLng = tuple[float, float]

# JSON-serializable types (recursive)
if TYPE_CHECKING:
    JsonValue = str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
else:
    JsonValue = str | int | float | bool | None | dict | list


class _LayerStyleRequired(TypedDict):
    color: str
    fillColor: str
    fillOpacity: float
    weight: int


class LayerStyleDict(_LayerStyleRequired, total=False):
    """Visual style requested from the map collaborator."""
    opacity: float


# Weather archive request structure
class ArchiveParamsDict(TypedDict):
    """Query parameters of the weather archive API."""
    latitude: float
    longitude: float
    start_date: str
    end_date: str
    hourly: str
    timezone: str


class FieldSummaryDict(TypedDict):
    """Field summary exposed to the presentation layer."""
    id: str
    name: str
    unit: str
