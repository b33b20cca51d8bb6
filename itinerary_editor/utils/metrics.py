"""Prometheus metrics for itinerary editing and trip saves."""

from prometheus_client import Counter, Histogram

# Editing metrics
itinerary_edits_total = Counter(
    "itinerary_edits_total",
    "Total itinerary edit commands",
    ["command", "outcome"],
)

# Save metrics
trip_saves_total = Counter(
    "trip_saves_total",
    "Total trip save attempts",
    ["outcome"],
)

trip_save_latency_ms = Histogram(
    "trip_save_latency_ms",
    "Trip save latency in milliseconds",
    ["outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)


class PrometheusEditMetrics:
    """Prometheus-based editing metrics implementation."""

    def inc_edit(self, command: str, outcome: str) -> None:
        """Increment edit command counter."""
        itinerary_edits_total.labels(command=command, outcome=outcome).inc()

    def record_save(self, outcome: str, latency_ms: float) -> None:
        """Count a save attempt and record its latency."""
        trip_saves_total.labels(outcome=outcome).inc()
        trip_save_latency_ms.labels(outcome=outcome).observe(latency_ms)
