"""Planar geometry helpers for drawn polygons.

Latitude/longitude are treated as planar coordinates. Areas are scaled
degrees squared, not geodesic areas.
"""

from collections.abc import Sequence

from region_colorizer.domain.constants import METERS_PER_DEGREE
from region_colorizer.domain.entities import BoundingBox
from region_colorizer.domain.errors import InvalidGeometryError
from region_colorizer.domain.types import LatLng


def centroid(vertices: Sequence[LatLng]) -> LatLng:
    """Arithmetic mean of all vertices."""
    if not vertices:
        raise InvalidGeometryError("Cannot compute centroid of empty vertex list")
    n = len(vertices)
    lat = sum(v[0] for v in vertices)
    lng = sum(v[1] for v in vertices)
    return (lat / n, lng / n)


def planar_area(vertices: Sequence[LatLng]) -> float:
    """Shoelace area over the implicitly closed ring, scaled to ~m².

    Fewer than 3 vertices yields 0.
    """
    n = len(vertices)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += vertices[i][0] * vertices[j][1]
        area -= vertices[j][0] * vertices[i][1]

    return abs(area) / 2 * METERS_PER_DEGREE * METERS_PER_DEGREE


def bounding_box(vertices: Sequence[LatLng]) -> BoundingBox:
    """Min/max latitude and longitude."""
    if not vertices:
        raise InvalidGeometryError("Cannot compute bounding box of empty vertex list")
    lats = [v[0] for v in vertices]
    lngs = [v[1] for v in vertices]
    return BoundingBox(north=max(lats), south=min(lats), east=max(lngs), west=min(lngs))
