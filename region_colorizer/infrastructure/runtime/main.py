"""Main entrypoint: headless demo of the polygon coloring pipeline."""

import asyncio
import signal

import structlog

from region_colorizer.application.services.field_catalog import describe_result
from region_colorizer.application.services.timeline import Timeline
from region_colorizer.infrastructure.config.data_sources import default_data_sources
from region_colorizer.infrastructure.config.settings import Settings
from region_colorizer.infrastructure.map.headless_map import HeadlessDrawingSession
from region_colorizer.infrastructure.observability.logging import configure_logging
from region_colorizer.infrastructure.runtime.clock import SystemClock
from region_colorizer.infrastructure.runtime.health import start_metrics_server
from region_colorizer.infrastructure.weather.series_provider import OpenMeteoSeriesProvider
from region_colorizer.interfaces.controllers.region_registry import RegionRegistry

logger = structlog.get_logger()

shutdown_event = asyncio.Event()

# Downtown San Francisco
DEMO_VERTICES = [
    (37.7849, -122.4094),
    (37.7849, -122.3994),
    (37.7749, -122.3994),
    (37.7749, -122.4094),
]


def signal_handler() -> None:
    """Handle shutdown signal."""
    logger.info("shutdown_signal_received")
    shutdown_event.set()


def _log_polygons(registry: RegionRegistry) -> None:
    for polygon in registry.polygons:
        result = polygon.last_result
        logger.info(
            "polygon_state",
            polygon_id=polygon.id,
            name=polygon.name,
            color=polygon.current_color,
            status=result.status.value if result else None,
            description=describe_result(result) if result else None,
        )


async def main_loop() -> None:
    """Draw one region, then color it for the current hour and a two-day range."""
    settings = Settings()
    configure_logging(settings.log_level, settings.log_json)
    logger.info("demo_starting", series_mode=settings.series_mode.value)

    start_metrics_server(settings)

    clock = SystemClock()
    drawing_session = HeadlessDrawingSession()
    registry = RegionRegistry(
        data_sources=default_data_sources(),
        provider=OpenMeteoSeriesProvider(settings),
        drawing_session=drawing_session,
        clock=clock,
    )
    timeline = Timeline(clock.now(), days=settings.timeline_days)

    await registry.handle_time_window_changed(timeline.single())

    registry.start_drawing()
    for latitude, longitude in DEMO_VERTICES:
        drawing_session.add_vertex(latitude, longitude)
    await drawing_session.finish_if_ready()
    _log_polygons(registry)

    if shutdown_event.is_set():
        return

    await registry.handle_time_window_changed(timeline.range())
    _log_polygons(registry)

    logger.info("demo_finished", polygons=len(registry.polygons), generation=registry.generation)


def main() -> None:
    """Entrypoint."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, signal_handler)

    try:
        loop.run_until_complete(main_loop())
    except KeyboardInterrupt:
        pass
    finally:
        loop.close()


if __name__ == "__main__":
    main()
