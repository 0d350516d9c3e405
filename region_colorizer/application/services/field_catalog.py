"""Field lookup and result description helpers."""

from collections.abc import Sequence

from region_colorizer.domain.entities import DataSource, PolygonDataResult
from region_colorizer.domain.types import FieldSummaryDict


def describe_result(result: PolygonDataResult) -> str:
    """Human-readable description of a pipeline result."""
    if result.value is None:
        return "No data available for this time period"

    value_text = f"{result.value:.2f} {result.unit}".rstrip()
    time_text = (
        f"averaged over {result.data_points} hours" if result.is_average else "for selected hour"
    )
    return f"{result.field_name}: {value_text} ({time_text})"


def can_process_field(data_source: DataSource, field_id: str) -> bool:
    """Whether the data source offers the field."""
    return field_id in data_source.fields


def available_fields(data_sources: Sequence[DataSource]) -> list[FieldSummaryDict]:
    """Fields of all enabled sources, first occurrence of each id wins."""
    fields: dict[str, FieldSummaryDict] = {}
    for data_source in data_sources:
        if not data_source.enabled:
            continue
        for data_field in data_source.fields.values():
            if data_field.id not in fields:
                fields[data_field.id] = {
                    "id": data_field.id,
                    "name": data_field.name,
                    "unit": data_field.unit,
                }
    return list(fields.values())
