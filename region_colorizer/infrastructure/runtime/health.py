"""Metrics server."""

from prometheus_client import start_http_server

from region_colorizer.infrastructure.config.settings import Settings


def start_metrics_server(settings: Settings) -> bool:
    """Start Prometheus metrics HTTP server when enabled."""
    if not settings.metrics_enabled:
        return False
    start_http_server(settings.prometheus_port)
    return True
