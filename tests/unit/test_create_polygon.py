"""Unit tests for create_polygon use case."""

from datetime import datetime, timezone

import pytest

from region_colorizer.application.use_cases.color_for_value import run as color_for_value
from region_colorizer.application.use_cases.create_polygon import build_pending
from region_colorizer.application.use_cases.create_polygon import run as create_polygon
from region_colorizer.domain.constants import METERS_PER_DEGREE
from region_colorizer.domain.entities import DrawnShape
from region_colorizer.domain.errors import InvalidGeometryError
from region_colorizer.infrastructure.map.headless_map import HeadlessLayer

CREATED_AT = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _shape(vertices, count=None):
    return DrawnShape(
        vertices=vertices,
        count=len(vertices) if count is None else count,
        layer=HeadlessLayer(),
    )


def test_build_pending_computes_geometry():
    """Test area and centroid are derived from the drawn vertices."""
    pending = build_pending(_shape([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]))

    assert pending.points == 4
    assert pending.centroid == (0.5, 0.5)
    assert pending.area == pytest.approx(METERS_PER_DEGREE**2)


def test_build_pending_rejects_two_vertices():
    """Test shapes with fewer than three vertices are rejected."""
    with pytest.raises(InvalidGeometryError):
        build_pending(_shape([(0.0, 0.0), (1.0, 1.0)]))


def test_build_pending_rejects_count_mismatch():
    """Test a reported count that disagrees with the vertices is rejected."""
    with pytest.raises(InvalidGeometryError):
        build_pending(_shape([(0.0, 0.0), (0.0, 1.0), (1.0, 0.0)], count=4))


def test_create_polygon_uses_base_color(weather_source):
    """Test a new polygon is named after its source and painted with the base color."""
    pending = build_pending(_shape([(0.0, 0.0), (0.0, 1.0), (1.0, 0.0)]))

    polygon = create_polygon(pending, weather_source, "polygon-1", sequence_number=3, created_at=CREATED_AT)

    assert polygon.name == "Open-Meteo Weather Region 3"
    assert polygon.data_source == weather_source.name
    assert polygon.current_color == weather_source.base_color
    assert polygon.current_value is None
    assert polygon.last_result is None
    assert polygon.layer is pending.layer
    assert polygon.layer.style == {
        "color": "#3b82f6",
        "fillColor": "#3b82f6",
        "fillOpacity": 0.3,
        "weight": 3,
        "opacity": 0.8,
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5.0, "#3b82f6"),
        (18.0, "#f59e0b"),
        (30.0, "#ef4444"),
        (None, "#3b82f6"),
    ],
)
def test_color_for_value(weather_source, value, expected):
    """Test known values are colored without a lookup."""
    assert color_for_value(value, weather_source) == expected


def test_color_for_value_without_rules(data_sources):
    """Test a source without rules always yields its base color."""
    environmental = data_sources[2]
    environmental.threshold_rules = []

    assert color_for_value(250.0, environmental) == "#10b981"
