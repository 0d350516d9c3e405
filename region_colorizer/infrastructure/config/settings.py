"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from region_colorizer.domain.enums import SeriesMode


class Settings(BaseSettings):
    """Application settings."""

    # Simulation is the data source of record; "live" queries the archive API
    # and falls back to simulation when it is unavailable
    series_mode: SeriesMode = SeriesMode.SIMULATION
    # Fixed seed makes simulated batches reproducible
    simulation_seed: int | None = None

    open_meteo_base_url: str = "https://archive-api.open-meteo.com/v1/archive"
    open_meteo_timeout_seconds: float = 10.0

    timeline_days: int = 30

    log_level: str = "INFO"
    log_json: bool = True

    metrics_enabled: bool = False
    prometheus_port: int = 9300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        # Allow extra fields to be loaded but not validated
        extra="ignore",
    )
