"""Series provider adapter: simulation of record with an optional live path."""

import secrets

import structlog

from region_colorizer.application.services.series_ops import to_utc
from region_colorizer.application.services.simulation import simulate_series
from region_colorizer.domain.entities import HourlySeries
from region_colorizer.domain.enums import SeriesMode
from region_colorizer.domain.errors import ProviderUnavailableError
from region_colorizer.domain.ports import SeriesProviderPort
from region_colorizer.domain.types import Timestamp
from region_colorizer.infrastructure.config.settings import Settings
from region_colorizer.infrastructure.weather.open_meteo_client import OpenMeteoClient

logger = structlog.get_logger()


class OpenMeteoSeriesProvider(SeriesProviderPort):
    """Hourly series provider.

    In simulation mode every lookup is generated locally. In live mode the
    archive API is queried first and an unavailable response falls back to
    simulation.
    """

    def __init__(self, settings: Settings, client: OpenMeteoClient | None = None) -> None:
        """Initialize series provider."""
        self.mode = settings.series_mode
        if settings.simulation_seed is None:
            # One seed per provider keeps repeated lookups stable within a run
            self.seed = secrets.randbits(32)
            logger.info("simulation_seed_drawn", seed=self.seed)
        else:
            self.seed = settings.simulation_seed
        self.client = client or OpenMeteoClient(settings)

    async def get_series(
        self,
        latitude: float,
        longitude: float,
        start: Timestamp,
        end: Timestamp,
        field_id: str,
    ) -> HourlySeries:
        """Get series for the configured mode."""
        if self.mode == SeriesMode.LIVE:
            try:
                return await self.fetch_series(latitude, longitude, start, end, field_id)
            except ProviderUnavailableError as e:
                logger.warning(
                    "live_series_fallback_to_simulation",
                    latitude=latitude,
                    longitude=longitude,
                    field=field_id,
                    reason=str(e),
                )
        return self.simulate_series(latitude, longitude, start, end, field_id)

    async def fetch_series(
        self,
        latitude: float,
        longitude: float,
        start: Timestamp,
        end: Timestamp,
        field_id: str,
    ) -> HourlySeries:
        """Live lookup over the whole days spanned by [start, end]."""
        response = await self.client.fetch_hourly(
            latitude,
            longitude,
            to_utc(start).date(),
            to_utc(end).date(),
            [field_id],
        )
        if response is None:
            raise ProviderUnavailableError("Weather archive unavailable")

        try:
            series = response.to_series()
        except (ValueError, TypeError) as e:
            raise ProviderUnavailableError(f"Unparseable archive times: {e}") from e

        if not series.has_field(field_id):
            raise ProviderUnavailableError(f"Archive response has no {field_id} column")
        return series

    def simulate_series(
        self,
        latitude: float,
        longitude: float,
        start: Timestamp,
        end: Timestamp,
        field_id: str,
    ) -> HourlySeries:
        """Simulated series, seeded when a simulation seed is configured."""
        return simulate_series(latitude, longitude, start, end, field_id, seed=self.seed)
