"""Prometheus metrics."""

from prometheus_client import Counter, Histogram

polygons_processed = Counter(
    "region_polygons_processed_total",
    "Total number of polygon results applied, by status",
    ["status"],
)

batches_started = Counter(
    "region_batches_started_total",
    "Total number of recompute batches started",
)

batches_applied = Counter(
    "region_batches_applied_total",
    "Total number of recompute batches applied to the registry",
)

batches_discarded = Counter(
    "region_batches_discarded_total",
    "Total number of batches discarded because a newer batch superseded them",
)

batch_duration_seconds = Histogram(
    "region_batch_duration_seconds",
    "Duration of recompute batches in seconds",
    buckets=[0.01, 0.05, 0.1, 0.5, 1, 5, 10, 30],
)

provider_fetch_failures = Counter(
    "region_provider_fetch_failures_total",
    "Total number of live series fetches that degraded to unavailable",
)
