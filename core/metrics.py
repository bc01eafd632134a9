"""
Prometheus metrics for the entitlement service.

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
license_keys_generated_total = Counter(
    "license_keys_generated_total",
    "Total license keys generated",
    ["duration_days"],
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total license keys activated by tenants",
)

license_keys_revoked_total = Counter(
    "license_keys_revoked_total",
    "Total license keys revoked",
)

# Tenant access metrics
access_checks_total = Counter(
    "access_checks_total",
    "Total tenant access evaluations",
    ["state"],
)

tenants_suspended_total = Counter(
    "tenants_suspended_total",
    "Total tenants moved to suspended",
)

# Reminder metrics
license_reminders_total = Counter(
    "license_reminders_total",
    "Expiry reminders by outcome",
    ["outcome"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)
