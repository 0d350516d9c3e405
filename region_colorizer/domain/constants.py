"""Domain constants: fallback colors, tolerances and layer style presets."""

from region_colorizer.domain.types import LayerStyleDict

# Source disabled or not found among the enabled sources
DISABLED_COLOR = "#cccccc"
# Computation raised while processing a polygon
ERROR_COLOR = "#ff0000"

UNKNOWN_FIELD_NAME = "Unknown"

# "=" rules match within this absolute distance
EQUALITY_TOLERANCE = 0.01

# Planar approximation: one degree ~ 111 km on both axes
METERS_PER_DEGREE = 111000.0

HOUR_SECONDS = 60 * 60


def active_style(color: str) -> LayerStyleDict:
    """Style for a polygon with a computed (or base) color."""
    return {"color": color, "fillColor": color, "fillOpacity": 0.3, "weight": 3, "opacity": 0.8}


def muted_style(color: str) -> LayerStyleDict:
    """Style for disabled or failed polygons."""
    return {"color": color, "fillColor": color, "fillOpacity": 0.2, "weight": 2}
