"""Custom metrics for the mock menu service."""

from opentelemetry import metrics

# Get meter for menu service
meter = metrics.get_meter("menu-svc")

# HTTP request counter
http_requests_counter = meter.create_counter(
    name="http_requests_total",
    description="Total number of HTTP requests by method, route and status",
    unit="1",
)

# HTTP request duration histogram
http_request_duration_histogram = meter.create_histogram(
    name="http_request_duration_seconds",
    description="Duration of HTTP requests by method and route",
    unit="s",
)

# Injected failure counter
fault_injection_counter = meter.create_counter(
    name="menu_fault_injections_total",
    description="Total number of simulated upstream failures injected",
    unit="1",
)


def record_http_request(method: str, route: str, status_code: int, duration_seconds: float) -> None:
    """Record a completed HTTP request.

    Args:
        method: HTTP method of the request
        route: Route template the request was matched against (or raw path)
        status_code: Status code sent to the client
        duration_seconds: Time spent handling the request in seconds
    """
    attributes = {"method": method, "route": route, "status": status_code}
    http_requests_counter.add(1, attributes)
    http_request_duration_histogram.record(duration_seconds, {"method": method, "route": route})


def record_fault_injection(operation: str) -> None:
    """Record a simulated upstream failure.

    Args:
        operation: The service operation that was failed on purpose
    """
    fault_injection_counter.add(1, {"operation": operation})
