"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""
import re
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import http_request_duration_seconds, http_requests_total

_UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")
_NUMERIC_SEGMENT = re.compile(r"/\d+(?=/|$)")


def normalize_endpoint(path: str) -> str:
    """Collapse IDs in a path so tenant and key IDs share one label."""
    path = _UUID_SEGMENT.sub("/{id}", path)
    return _NUMERIC_SEGMENT.sub("/{id}", path)


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _record(self, request: HttpRequest, endpoint: str, status_code: int, started: float) -> None:
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
            time.perf_counter() - started
        )

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and record metrics."""
        started = time.perf_counter()
        endpoint = normalize_endpoint(request.path)
        try:
            response = self.get_response(request)
        except Exception:
            self._record(request, endpoint, 500, started)
            raise
        self._record(request, endpoint, response.status_code, started)
        return response
