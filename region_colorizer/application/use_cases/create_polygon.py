"""Turn a completed shape into a polygon bound to a data source."""

import structlog

from region_colorizer.application.services.geometry import centroid, planar_area
from region_colorizer.domain.constants import active_style
from region_colorizer.domain.entities import DataSource, DrawnShape, PendingPolygon, Polygon
from region_colorizer.domain.errors import InvalidGeometryError
from region_colorizer.domain.types import Timestamp

logger = structlog.get_logger()


def build_pending(shape: DrawnShape) -> PendingPolygon:
    """Validate the drawn shape and compute its area and centroid."""
    vertices = [(float(lat), float(lng)) for lat, lng in shape.vertices]
    if shape.count != len(vertices):
        raise InvalidGeometryError(
            f"Shape reports {shape.count} points but has {len(vertices)} vertices"
        )
    if len(vertices) < 3:
        raise InvalidGeometryError(f"Polygon needs >= 3 vertices, got {len(vertices)}")

    pending = PendingPolygon(
        layer=shape.layer,
        points=len(vertices),
        area=planar_area(vertices),
        coordinates=vertices,
        centroid=centroid(vertices),
    )
    logger.info(
        "shape_completed",
        points=pending.points,
        area_m2=round(pending.area, 1),
        centroid=pending.centroid,
    )
    return pending


def run(
    pending: PendingPolygon,
    data_source: DataSource,
    polygon_id: str,
    sequence_number: int,
    created_at: Timestamp,
) -> Polygon:
    """Create the polygon shell and paint it with the source's base color."""
    polygon = Polygon(
        id=polygon_id,
        name=f"{data_source.name} Region {sequence_number}",
        data_source=data_source.name,
        layer=pending.layer,
        points=pending.points,
        area=pending.area,
        coordinates=list(pending.coordinates),
        centroid=pending.centroid,
        current_color=data_source.base_color,
        created_at=created_at,
    )
    polygon.layer.apply_style(active_style(data_source.base_color))

    logger.info(
        "polygon_created",
        polygon_id=polygon.id,
        name=polygon.name,
        data_source=data_source.name,
    )
    return polygon
