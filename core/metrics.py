"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total issuance requests by outcome (new or existing)",
    ["source", "outcome"],
)

license_verifications_total = Counter(
    "license_verifications_total",
    "Total license verifications by outcome",
    ["outcome"],
)

# Payment provider metrics
stripe_webhook_events_total = Counter(
    "stripe_webhook_events_total",
    "Total Stripe webhook events by type and handling outcome",
    ["event_type", "outcome"],
)

# Store metrics
store_operation_duration_seconds = Histogram(
    "store_operation_duration_seconds",
    "Key-value store operation duration in seconds",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
