"""Prometheus metrics for highlight composition, installments and HTTP latency"""

from prometheus_client import Counter, Histogram

# Composition metrics
composition_counter = Counter(
    "calendar_highlight_compositions_total",
    "Total highlight compositions",
    ["source"],  # api | calendar
)

highlight_events_histogram = Histogram(
    "calendar_highlight_events",
    "Number of highlight events per composition",
    buckets=[0, 10, 25, 50, 100, 250, 500, 1000],
)

composition_duration_histogram = Histogram(
    "calendar_highlight_composition_seconds",
    "Highlight composition time",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25],
)

# Installment metrics
installments_posted_counter = Counter(
    "card_installments_posted_total",
    "Installments posted to cards",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_composition(source: str, event_count: int, duration_seconds: float) -> None:
    """Record one composition pass and the size of its output"""
    composition_counter.labels(source=source).inc()
    highlight_events_histogram.observe(event_count)
    composition_duration_histogram.observe(duration_seconds)
