"""Process a batch of polygons concurrently."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from region_colorizer.application.use_cases.process_polygon import run as process_polygon
from region_colorizer.domain.constants import DISABLED_COLOR, UNKNOWN_FIELD_NAME
from region_colorizer.domain.entities import DataSource, PolygonDataResult
from region_colorizer.domain.enums import ResultStatus
from region_colorizer.domain.errors import NoMatchingSourceError
from region_colorizer.domain.ports import ClockPort, SeriesProviderPort
from region_colorizer.domain.types import LatLng, Timestamp

logger = structlog.get_logger()


@dataclass(frozen=True)
class PolygonInput:
    """Minimal polygon view needed by the batch."""

    id: str
    coordinates: list[LatLng]
    data_source: str


async def run(
    polygons: Sequence[PolygonInput],
    data_sources: Sequence[DataSource],
    start: Timestamp,
    end: Timestamp,
    provider: SeriesProviderPort,
    clock: ClockPort,
) -> list[PolygonDataResult]:
    """Process all polygons; results come back in input order once all resolve."""
    enabled = {ds.name: ds for ds in reversed(data_sources) if ds.enabled}

    tasks = []
    for polygon in polygons:
        try:
            data_source = _resolve_source(enabled, polygon.data_source)
        except NoMatchingSourceError as e:
            tasks.append(_disabled_result(polygon.id, e, clock))
            continue
        tasks.append(
            process_polygon(
                polygon.id,
                polygon.coordinates,
                data_source,
                start,
                end,
                provider,
                clock,
            )
        )

    results = await asyncio.gather(*tasks)

    logger.info(
        "batch_processed",
        polygon_count=len(polygons),
        disabled_count=sum(r.status == ResultStatus.SOURCE_DISABLED for r in results),
        error_count=sum(r.status == ResultStatus.ERROR for r in results),
    )
    return list(results)


def _resolve_source(enabled: dict[str, DataSource], source_name: str) -> DataSource:
    data_source = enabled.get(source_name)
    if data_source is None:
        raise NoMatchingSourceError(f"No enabled data source named {source_name!r}")
    return data_source


async def _disabled_result(
    polygon_id: str,
    error: NoMatchingSourceError,
    clock: ClockPort,
) -> PolygonDataResult:
    """Neutral result for a polygon whose source is disabled or missing."""
    logger.debug("no_matching_source", polygon_id=polygon_id, reason=str(error))
    return PolygonDataResult(
        polygon_id=polygon_id,
        value=None,
        color=DISABLED_COLOR,
        field_name=UNKNOWN_FIELD_NAME,
        unit="",
        timestamp=clock.isoformat(clock.now()),
        is_average=False,
        data_points=0,
        status=ResultStatus.SOURCE_DISABLED,
    )
