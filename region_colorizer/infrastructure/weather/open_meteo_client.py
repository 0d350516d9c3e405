"""Weather archive HTTP client."""

import asyncio
from collections.abc import Sequence
from datetime import date

import requests
import structlog
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from region_colorizer.application.dto.weather import ArchiveResponse
from region_colorizer.domain.types import ArchiveParamsDict, JsonValue
from region_colorizer.infrastructure.config.settings import Settings
from region_colorizer.infrastructure.observability.metrics import provider_fetch_failures

logger = structlog.get_logger()


class OpenMeteoClient:
    """Open-Meteo archive client. Failures degrade to None, never raise."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """Initialize HTTP session."""
        self.base_url = settings.open_meteo_base_url
        self.timeout = settings.open_meteo_timeout_seconds
        self.session = session or requests.Session()

    @staticmethod
    def build_params(
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date,
        fields: Sequence[str],
    ) -> ArchiveParamsDict:
        """Build archive query parameters."""
        return {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "hourly": ",".join(fields),
            "timezone": "auto",
        }

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _get(self, params: ArchiveParamsDict) -> dict[str, JsonValue]:
        """GET the archive endpoint, retrying transient transport errors."""
        response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def fetch_hourly(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date,
        fields: Sequence[str],
    ) -> ArchiveResponse | None:
        """Fetch hourly fields for a location and inclusive date range."""
        params = self.build_params(latitude, longitude, start_date, end_date, fields)
        logger.info(
            "fetching_weather_archive",
            latitude=latitude,
            longitude=longitude,
            start_date=params["start_date"],
            end_date=params["end_date"],
            fields=params["hourly"],
        )
        try:
            payload = await asyncio.to_thread(self._get, params)
            return ArchiveResponse.model_validate(payload)
        except requests.RequestException as e:
            self._record_failure("transport", params, e)
            return None
        except (ValidationError, ValueError, TypeError) as e:
            self._record_failure("malformed_body", params, e)
            return None

    def _record_failure(self, reason: str, params: ArchiveParamsDict, error: Exception) -> None:
        provider_fetch_failures.inc()
        logger.warning(
            "provider_unavailable",
            reason=reason,
            latitude=params["latitude"],
            longitude=params["longitude"],
            error=str(error),
        )
