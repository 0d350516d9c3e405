"""Process one polygon: series lookup, window reduction and color resolution."""

from collections.abc import Sequence

import structlog

from region_colorizer.application.services.geometry import centroid
from region_colorizer.application.services.rule_engine import match_rule
from region_colorizer.application.services.series_ops import reduce_series, window_samples
from region_colorizer.domain.constants import ERROR_COLOR, HOUR_SECONDS
from region_colorizer.domain.entities import DataSource, PolygonDataResult
from region_colorizer.domain.enums import ResultStatus
from region_colorizer.domain.errors import ComputationFailureError, DomainError
from region_colorizer.domain.ports import ClockPort, SeriesProviderPort
from region_colorizer.domain.types import LatLng, Timestamp

logger = structlog.get_logger()


async def run(
    polygon_id: str,
    coordinates: Sequence[LatLng],
    data_source: DataSource,
    start: Timestamp,
    end: Timestamp,
    provider: SeriesProviderPort,
    clock: ClockPort,
) -> PolygonDataResult:
    """Compute value and color for a polygon. Never raises."""
    try:
        location = centroid(coordinates)
        field_id = data_source.selected_field
        is_range = abs((end - start).total_seconds()) > HOUR_SECONDS

        series = await provider.get_series(location[0], location[1], start, end, field_id)

        value = reduce_series(series, field_id, start, end)
        if is_range:
            data_points = len(window_samples(series, field_id, start, end))
        else:
            data_points = 1 if value is not None else 0

        rule = match_rule(value, data_source.threshold_rules)
        if rule is not None:
            color, status = rule.color, ResultStatus.MATCHED
        elif value is None:
            color, status = data_source.base_color, ResultStatus.NO_DATA
        else:
            color, status = data_source.base_color, ResultStatus.NO_RULE_MATCH

        field_info = data_source.field_info
        result = PolygonDataResult(
            polygon_id=polygon_id,
            value=value,
            color=color,
            field_name=field_info.name,
            unit=field_info.unit,
            timestamp=clock.isoformat(clock.now()),
            is_average=is_range,
            data_points=data_points,
            status=status,
        )

        logger.debug(
            "polygon_processed",
            polygon_id=polygon_id,
            field=field_id,
            value=value,
            color=color,
            status=status.value,
            data_points=data_points,
        )
        return result

    except Exception as e:
        failure = e if isinstance(e, DomainError) else ComputationFailureError(str(e))
        logger.error(
            "polygon_processing_failed",
            polygon_id=polygon_id,
            data_source=data_source.name,
            error_kind=type(failure).__name__,
            error=str(failure),
            exc_info=True,
        )
        return _error_result(polygon_id, data_source, clock)


def _error_result(
    polygon_id: str,
    data_source: DataSource,
    clock: ClockPort,
) -> PolygonDataResult:
    """Fallback result for a failed computation."""
    field_info = data_source.fields.get(data_source.selected_field)
    try:
        timestamp = clock.isoformat(clock.now())
    except Exception:
        logger.warning("clock_unavailable", polygon_id=polygon_id, exc_info=True)
        timestamp = ""
    return PolygonDataResult(
        polygon_id=polygon_id,
        value=None,
        color=ERROR_COLOR,
        field_name=field_info.name if field_info else data_source.selected_field,
        unit=field_info.unit if field_info else "",
        timestamp=timestamp,
        is_average=False,
        data_points=0,
        status=ResultStatus.ERROR,
    )
