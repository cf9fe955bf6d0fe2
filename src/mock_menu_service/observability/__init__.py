"""OpenTelemetry instrumentation and observability utilities."""

from mock_menu_service.observability.config import (
    configure_logging,
    setup_observability,
    shutdown_observability,
)
from mock_menu_service.observability.decorators import traced
from mock_menu_service.observability.middleware import RequestLoggingMiddleware

__all__ = [
    "setup_observability",
    "shutdown_observability",
    "configure_logging",
    "traced",
    "RequestLoggingMiddleware",
]
