"""Default data source catalogue."""

from region_colorizer.domain.entities import DataField, DataSource, ThresholdRule
from region_colorizer.domain.enums import ComparisonOperator


def _fields(*fields: DataField) -> dict[str, DataField]:
    return {f.id: f for f in fields}


def _rules(*specs: tuple[str, ComparisonOperator, float, str]) -> list[ThresholdRule]:
    return [
        ThresholdRule(id=str(i), color=color, operator=op, value=value, label=label)
        for i, (color, op, value, label) in enumerate(specs, start=1)
    ]


def default_data_sources() -> list[DataSource]:
    """Fresh copies of the built-in sources; only the weather source starts enabled."""
    return [
        DataSource(
            id="open-meteo",
            name="Open-Meteo Weather",
            enabled=True,
            required=True,
            base_color="#3b82f6",
            selected_field="temperature_2m",
            fields=_fields(
                DataField("temperature_2m", "Temperature", "°C", "2m above ground temperature"),
                DataField("relative_humidity_2m", "Humidity", "%", "Relative humidity at 2m"),
                DataField("precipitation", "Precipitation", "mm", "Total precipitation"),
                DataField("wind_speed_10m", "Wind Speed", "m/s", "Wind speed at 10m height"),
                DataField("surface_pressure", "Pressure", "hPa", "Surface air pressure"),
            ),
            threshold_rules=_rules(
                ("#3b82f6", ComparisonOperator.LT, 10, "Cold"),
                ("#f59e0b", ComparisonOperator.LT, 25, "Mild"),
                ("#ef4444", ComparisonOperator.GE, 25, "Hot"),
            ),
        ),
        DataSource(
            id="traffic",
            name="Traffic Data",
            enabled=False,
            required=False,
            base_color="#ef4444",
            selected_field="congestion_level",
            fields=_fields(
                DataField("congestion_level", "Congestion Level", "%", "Traffic congestion percentage"),
                DataField("average_speed", "Average Speed", "km/h", "Average vehicle speed"),
                DataField("vehicle_count", "Vehicle Count", "vehicles/h", "Vehicles per hour"),
            ),
            threshold_rules=_rules(
                ("#22c55e", ComparisonOperator.LT, 30, "Light"),
                ("#f59e0b", ComparisonOperator.LT, 70, "Moderate"),
                ("#ef4444", ComparisonOperator.GE, 70, "Heavy"),
            ),
        ),
        DataSource(
            id="environmental",
            name="Environmental Sensors",
            enabled=False,
            required=False,
            base_color="#10b981",
            selected_field="air_quality_index",
            fields=_fields(
                DataField("air_quality_index", "Air Quality Index", "AQI", "Air quality measurement"),
                DataField("noise_level", "Noise Level", "dB", "Environmental noise level"),
                DataField("pm25", "PM2.5", "μg/m³", "Fine particulate matter"),
            ),
            threshold_rules=_rules(
                ("#22c55e", ComparisonOperator.LT, 50, "Good"),
                ("#f59e0b", ComparisonOperator.LT, 100, "Moderate"),
                ("#ef4444", ComparisonOperator.GE, 100, "Poor"),
            ),
        ),
    ]
