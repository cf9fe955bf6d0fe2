"""OpenTelemetry configuration and setup."""

import logging
import os
from typing import Any

from opentelemetry import metrics, propagate, trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


def get_service_resource() -> Resource:
    """Create OpenTelemetry resource with service identification.

    Returns:
        Resource with service name, version and environment attributes
    """
    service_name = os.getenv("OTEL_SERVICE_NAME", "menu-svc")
    environment = os.getenv("ENVIRONMENT", "development")

    return Resource.create(
        {
            "service.name": service_name,
            "service.version": SERVICE_VERSION,
            "deployment.environment": environment,
        }
    )


def setup_tracing(resource: Resource) -> TracerProvider:
    """Configure OpenTelemetry tracing.

    Args:
        resource: Service resource for trace identification

    Returns:
        The tracer provider installed as the global provider
    """
    # Create OTLP exporter
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")

    # Create tracer provider with batch processor
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter, schedule_delay_millis=1000))

    # Set as global tracer provider
    trace.set_tracer_provider(provider)

    # Accept and forward W3C trace context and baggage headers
    propagate.set_global_textmap(
        CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])
    )

    logger.info(f"OpenTelemetry tracing configured with endpoint: {otlp_endpoint}")
    return provider


def setup_metrics(resource: Resource) -> MeterProvider:
    """Configure OpenTelemetry metrics.

    Args:
        resource: Service resource for metric identification

    Returns:
        The meter provider installed as the global provider
    """
    # Create OTLP metric exporter
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    exporter = OTLPMetricExporter(endpoint=f"{otlp_endpoint}/v1/metrics")

    # Create meter provider with periodic reader
    reader = PeriodicExportingMetricReader(exporter, export_interval_millis=60000)
    provider = MeterProvider(resource=resource, metric_readers=[reader])

    # Set as global meter provider
    metrics.set_meter_provider(provider)

    logger.info(f"OpenTelemetry metrics configured with endpoint: {otlp_endpoint}")
    return provider


def setup_observability(app: Any = None, enable_exporters: bool = True) -> list[Any]:
    """Initialize OpenTelemetry tracing, metrics and FastAPI instrumentation.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to enable OTLP exporters (default: True, set False for tests)

    Returns:
        The installed providers, to be passed to shutdown_observability()
    """
    # Check if we're in test environment
    environment = os.getenv("ENVIRONMENT", "development")
    if environment == "test":
        enable_exporters = False

    # Create service resource
    resource = get_service_resource()
    providers: list[Any] = []

    # Only setup exporters if enabled (skip in test environments)
    if enable_exporters:
        # Setup tracing
        providers.append(setup_tracing(resource))

        # Setup metrics
        providers.append(setup_metrics(resource))
    else:
        # Minimal tracing and metrics without exporters
        tracer_provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(tracer_provider)

        meter_provider = MeterProvider(resource=resource)
        metrics.set_meter_provider(meter_provider)

        providers.extend([tracer_provider, meter_provider])

    # Instrument FastAPI if provided
    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls="health")
        logger.info("FastAPI application instrumented")

    logger.info("OpenTelemetry observability fully configured")
    return providers


def shutdown_observability(providers: list[Any]) -> None:
    """Flush and shut down telemetry providers.

    Args:
        providers: Providers returned by setup_observability()
    """
    for provider in providers:
        try:
            provider.shutdown()
        except Exception as e:
            logger.error(f"Failed to shut down {type(provider).__name__}: {e}")

    logger.info("OpenTelemetry observability shut down")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    # Get log level from environment or use provided default
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    # Create JSON formatter
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add console handler with JSON formatting
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Route uvicorn's own loggers through the JSON handler
    for name in ("uvicorn", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    logger.info(f"Structured JSON logging configured at {level_str} level")
