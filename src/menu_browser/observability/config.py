"""OpenTelemetry configuration and structured logging setup."""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

# Menu API paths and the resource each one serves
MENU_ENDPOINTS = {
    "/api/getMenu.php": "categories",
    "/api/getSubMenu.php": "dishes",
}


def get_service_resource() -> Resource:
    """Create OpenTelemetry resource with service identification.

    Returns:
        Resource with service name, environment and menu API origin attributes
    """
    service_name = os.getenv("OTEL_SERVICE_NAME", "menu-browser")
    environment = os.getenv("ENVIRONMENT", "development")
    menu_api_base_url = os.getenv("MENU_API_BASE_URL", "https://vkus-sovet.ru")

    return Resource.create(
        {
            "service.name": service_name,
            "deployment.environment": environment,
            "menu.api.base_url": menu_api_base_url,
        }
    )


def setup_tracing(resource: Resource) -> None:
    """Configure OpenTelemetry tracing with an OTLP exporter.

    Args:
        resource: Service resource for trace identification
    """
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")

    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    logger.info(f"OpenTelemetry tracing configured with endpoint: {otlp_endpoint}")


def setup_metrics(resource: Resource) -> None:
    """Configure OpenTelemetry metrics with a periodic OTLP exporter.

    Args:
        resource: Service resource for metric identification
    """
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    export_interval = int(os.getenv("OTEL_METRIC_EXPORT_INTERVAL", "60000"))
    exporter = OTLPMetricExporter(endpoint=f"{otlp_endpoint}/v1/metrics")

    reader = PeriodicExportingMetricReader(exporter, export_interval_millis=export_interval)
    provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(provider)

    logger.info(f"OpenTelemetry metrics configured with endpoint: {otlp_endpoint}")


def tag_menu_request(span: Span, request: Any) -> None:
    """Mark outbound httpx spans that target a menu API endpoint.

    Args:
        span: Client span created by the httpx instrumentation
        request: Request info with the outgoing URL
    """
    if span is None or not span.is_recording():
        return
    resource = MENU_ENDPOINTS.get(request.url.path)
    if resource is not None:
        span.set_attribute("menu.resource", resource)


async def tag_menu_request_async(span: Span, request: Any) -> None:
    tag_menu_request(span, request)


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Initialize OpenTelemetry with tracing, metrics, and auto-instrumentation.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to enable OTLP exporters (default: True, set False for tests)
    """
    if os.getenv("ENVIRONMENT", "development") == "test":
        enable_exporters = False

    resource = get_service_resource()

    if enable_exporters:
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        # Providers without exporters so spans and instruments stay no-ops
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    # Outbound menu API calls
    HTTPXClientInstrumentor().instrument(
        request_hook=tag_menu_request, async_request_hook=tag_menu_request_async
    )
    logger.info("Auto-instrumentation enabled for httpx")

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI application instrumented")

    logger.info("OpenTelemetry observability fully configured")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs every menu API request at INFO
    logging.getLogger("httpx").setLevel(level if level <= logging.DEBUG else logging.WARNING)

    logger.info(f"Structured JSON logging configured at {level_str} level")
