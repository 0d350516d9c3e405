"""Color for an already known value."""

from region_colorizer.application.services.rule_engine import resolve_color
from region_colorizer.domain.entities import DataSource


def run(value: float | None, data_source: DataSource) -> str:
    """Resolve color with the data source's rules, skipping any fetch."""
    return resolve_color(value, data_source.threshold_rules, data_source.base_color)
