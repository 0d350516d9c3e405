"""Unit tests for field catalog helpers."""

from region_colorizer.application.services.field_catalog import (
    available_fields,
    can_process_field,
    describe_result,
)
from region_colorizer.domain.entities import DataField, PolygonDataResult
from region_colorizer.domain.enums import ResultStatus


def _result(**overrides):
    params = {
        "polygon_id": "p1",
        "value": 8.0,
        "color": "#3b82f6",
        "field_name": "Temperature",
        "unit": "°C",
        "timestamp": "2024-06-15T12:00:00.000Z",
        "is_average": True,
        "data_points": 48,
        "status": ResultStatus.MATCHED,
    }
    params.update(overrides)
    return PolygonDataResult(**params)


def test_describe_average():
    """Test averaged results mention the hour count."""
    assert describe_result(_result()) == "Temperature: 8.00 °C (averaged over 48 hours)"


def test_describe_single_hour():
    """Test single-hour results mention the selected hour."""
    result = _result(value=18.456, is_average=False, data_points=1)

    assert describe_result(result) == "Temperature: 18.46 °C (for selected hour)"


def test_describe_no_data():
    """Test results without a value say so."""
    assert describe_result(_result(value=None)) == "No data available for this time period"


def test_describe_unitless():
    """Test an empty unit leaves no trailing space."""
    result = _result(unit="", is_average=False)

    assert describe_result(result) == "Temperature: 8.00 (for selected hour)"


def test_can_process_field(weather_source):
    """Test field support follows the source's field mapping."""
    assert can_process_field(weather_source, "precipitation")
    assert not can_process_field(weather_source, "pm25")


def test_available_fields_only_from_enabled_sources(data_sources):
    """Test fields of disabled sources are not offered."""
    ids = [f["id"] for f in available_fields(data_sources)]

    assert "temperature_2m" in ids
    assert "congestion_level" not in ids


def test_available_fields_deduplicated(data_sources):
    """Test a field offered by two sources appears once, first source wins."""
    for data_source in data_sources:
        data_source.set_enabled(True)
    data_sources[1].fields["temperature_2m"] = DataField("temperature_2m", "Road Temperature", "°C")

    fields = available_fields(data_sources)
    ids = [f["id"] for f in fields]

    assert len(ids) == len(set(ids))
    assert len(ids) == 11
    assert fields[0] == {"id": "temperature_2m", "name": "Temperature", "unit": "°C"}
