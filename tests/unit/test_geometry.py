"""Unit tests for geometry helpers."""

import pytest

from region_colorizer.application.services.geometry import bounding_box, centroid, planar_area
from region_colorizer.domain.constants import METERS_PER_DEGREE
from region_colorizer.domain.errors import InvalidGeometryError


def test_centroid_is_vertex_mean():
    """Test centroid is the arithmetic mean of the vertices."""
    vertices = [(0.0, 0.0), (0.0, 2.0), (2.0, 2.0), (2.0, 0.0)]

    assert centroid(vertices) == (1.0, 1.0)


def test_centroid_of_repeated_vertex():
    """Test centroid of identical vertices is that vertex."""
    vertices = [(37.5, -122.25)] * 3

    assert centroid(vertices) == pytest.approx((37.5, -122.25))


def test_centroid_empty_raises():
    """Test centroid of no vertices raises."""
    with pytest.raises(InvalidGeometryError):
        centroid([])


def test_area_of_unit_square():
    """Test one square degree scales to 111 km squared."""
    vertices = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]

    assert planar_area(vertices) == pytest.approx(METERS_PER_DEGREE**2)


def test_area_ignores_orientation():
    """Test clockwise and counter-clockwise rings give the same area."""
    vertices = [(0.0, 0.0), (0.0, 2.0), (1.0, 3.0), (3.0, 1.0)]

    assert planar_area(vertices) == pytest.approx(planar_area(list(reversed(vertices))))
    assert planar_area(vertices) > 0


def test_area_of_triangle():
    """Test triangle area uses the shoelace formula."""
    vertices = [(0.0, 0.0), (0.0, 2.0), (2.0, 0.0)]

    assert planar_area(vertices) == pytest.approx(2.0 * METERS_PER_DEGREE**2)


@pytest.mark.parametrize(
    "vertices",
    [
        [],
        [(1.0, 1.0)],
        [(1.0, 1.0), (2.0, 2.0)],
    ],
)
def test_area_below_three_vertices_is_zero(vertices):
    """Test degenerate vertex lists have zero area."""
    assert planar_area(vertices) == 0.0


def test_area_of_collinear_points_is_zero():
    """Test collinear points enclose no area."""
    assert planar_area([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]) == pytest.approx(0.0)


def test_bounding_box():
    """Test bounding box takes min and max of each axis."""
    box = bounding_box([(37.78, -122.41), (37.77, -122.39), (37.79, -122.40)])

    assert box.north == 37.79
    assert box.south == 37.77
    assert box.east == -122.39
    assert box.west == -122.41


def test_bounding_box_empty_raises():
    """Test bounding box of no vertices raises."""
    with pytest.raises(InvalidGeometryError):
        bounding_box([])
