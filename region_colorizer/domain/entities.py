"""Domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from region_colorizer.domain.enums import ComparisonOperator, ResultStatus
from region_colorizer.domain.errors import (
    DataSourceLockedError,
    InvalidDataSourceError,
    InvalidGeometryError,
    InvalidTimeWindowError,
)
from region_colorizer.domain.types import LatLng, SeriesFrame, Timestamp

if TYPE_CHECKING:
    from region_colorizer.domain.ports import RenderHandlePort


@dataclass(frozen=True)
class DataField:
    """Measurable field offered by a data source."""

    id: str
    name: str
    unit: str
    description: str = ""


@dataclass(frozen=True)
class ThresholdRule:
    """Single (operator, value, color) rule. Edits replace the rule."""

    id: str
    color: str
    operator: ComparisonOperator
    value: float
    label: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.operator, ComparisonOperator):
            object.__setattr__(self, "operator", ComparisonOperator(self.operator))


@dataclass
class DataSource:
    """Configured data source with its fields and ordered threshold rules.

    `fields` maps field id to descriptor; `selected_field` must always be one
    of its keys. Rules are evaluated in list order, first match wins.
    """

    id: str
    name: str
    base_color: str
    selected_field: str
    fields: dict[str, DataField]
    threshold_rules: list[ThresholdRule] = field(default_factory=list)
    enabled: bool = True
    required: bool = False

    def __post_init__(self) -> None:
        if self.selected_field not in self.fields:
            raise InvalidDataSourceError(
                f"Data source {self.id}: selected field {self.selected_field!r} "
                f"not in fields {sorted(self.fields)}"
            )
        for key, data_field in self.fields.items():
            if key != data_field.id:
                raise InvalidDataSourceError(
                    f"Data source {self.id}: field key {key!r} != field id {data_field.id!r}"
                )
        if self.required and not self.enabled:
            raise InvalidDataSourceError(f"Data source {self.id} is required but disabled")

    @property
    def field_info(self) -> DataField:
        """Descriptor of the selected field."""
        return self.fields[self.selected_field]

    def select_field(self, field_id: str) -> None:
        """Switch the selected field, keeping it a member of `fields`."""
        if field_id not in self.fields:
            raise InvalidDataSourceError(
                f"Data source {self.id} has no field {field_id!r}"
            )
        self.selected_field = field_id

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the source. Required sources stay enabled."""
        if self.required and not enabled:
            raise DataSourceLockedError(f"Data source {self.id} is required")
        self.enabled = enabled


@dataclass(frozen=True)
class TimeWindow:
    """Selected time window. Replaced wholesale, compared by (start, end)."""

    start: Timestamp
    end: Timestamp

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidTimeWindowError(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @classmethod
    def single_hour(cls, start: Timestamp) -> TimeWindow:
        """Window [start, start + 1h) for the single timeline handle."""
        return cls(start=start, end=start + timedelta(hours=1))

    @classmethod
    def between(cls, start: Timestamp, end: Timestamp) -> TimeWindow:
        """Window between two timeline handles."""
        return cls(start=start, end=end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class BoundingBox:
    """Min/max latitude and longitude of a vertex set."""

    north: float
    south: float
    east: float
    west: float


@dataclass(frozen=True)
class HourlySeries:
    """Hourly samples for one location.

    `frame` has a tz-aware UTC `time` column plus one float column per field,
    mirroring the weather provider's `hourly` payload.
    """

    latitude: float
    longitude: float
    frame: SeriesFrame

    def has_field(self, field_id: str) -> bool:
        return field_id in self.frame.columns and field_id != "time"


@dataclass(frozen=True)
class DrawnShape:
    """Shape reported by the drawing collaborator on completion."""

    vertices: list[LatLng]
    count: int
    layer: RenderHandlePort


@dataclass(frozen=True)
class PendingPolygon:
    """Completed shape awaiting a data source assignment."""

    layer: RenderHandlePort
    points: int
    area: float
    coordinates: list[LatLng]
    centroid: LatLng


@dataclass(frozen=True)
class PolygonDataResult:
    """Result of one pipeline run for one polygon. Never mutated."""

    polygon_id: str
    value: float | None
    color: str
    field_name: str
    unit: str
    timestamp: str
    is_average: bool
    data_points: int
    status: ResultStatus


@dataclass(frozen=True)
class Polygon:
    """Drawn region bound to a data source by name."""

    id: str
    name: str
    data_source: str
    layer: RenderHandlePort
    points: int
    area: float
    coordinates: list[LatLng]
    centroid: LatLng
    current_color: str
    created_at: Timestamp
    current_value: float | None = None
    last_result: PolygonDataResult | None = None

    def __post_init__(self) -> None:
        if self.points < 3 or len(self.coordinates) != self.points:
            raise InvalidGeometryError(
                f"Polygon {self.id}: expected >= 3 vertices matching points={self.points}, "
                f"got {len(self.coordinates)}"
            )
