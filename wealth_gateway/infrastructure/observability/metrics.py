"""Prometheus metrics for monitoring snapshot builds, forecasts, and upstream services"""

from prometheus_client import Counter, Histogram

# Engine metrics
snapshot_counter = Counter(
    "wealth_snapshot_total",
    "Total financial snapshots built",
    ["source"],  # inline | entity_store
)

skipped_records_counter = Counter(
    "wealth_skipped_records_total",
    "Malformed records excluded from aggregation",
)

forecast_counter = Counter(
    "wealth_forecast_total",
    "Net-worth forecasts computed",
    ["surplus"],  # positive | negative
)

savings_rate_histogram = Histogram(
    "wealth_savings_rate",
    "Savings rate of built snapshots",
    buckets=[-0.5, 0.0, 0.1, 0.2, 0.3, 0.5, 0.75, 1.0],
)

# Entity store metrics
entity_store_failures_counter = Counter(
    "entity_store_failures_total",
    "Failed entity store calls",
)

# Advisor metrics
advisor_latency_histogram = Histogram(
    "advisor_latency_seconds",
    "Advice service response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

advisor_failure_counter = Counter(
    "advisor_failures_total",
    "Failed advice service calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_snapshot(source: str, savings_rate: float, skipped_records: int) -> None:
    """Record snapshot metrics for monitoring data quality and savings distribution"""
    snapshot_counter.labels(source=source).inc()
    savings_rate_histogram.observe(savings_rate)
    if skipped_records:
        skipped_records_counter.inc(skipped_records)


def record_forecast(negative_surplus: bool) -> None:
    """Record forecast metrics"""
    forecast_counter.labels(surplus="negative" if negative_surplus else "positive").inc()
