# lexrel/shared/telemetry.py
"""
OpenTelemetry setup for lexrel.

The store and the neighbour index open spans through `get_tracer`. Those spans
are only exported once the embedding application calls `setup_telemetry()` at
startup (together with `configure_logging()`); until then the global no-op
provider is used.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from lexrel import __version__
from lexrel.shared.config import settings

logger = logging.getLogger(__name__)

def setup_telemetry(app_name: str = settings.OTEL_SERVICE_NAME) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Should be called once at process startup.

    Returns:
        True if a tracer provider was installed.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("Telemetry disabled: No OTEL_EXPORTER_OTLP_ENDPOINT configured.")
        return False

    logger.info(f"Initializing Telemetry for service: {app_name}")

    # 1. Define Resource (Service Identity)
    resource = Resource.create(attributes={
        "service.name": app_name,
        "deployment.environment": settings.APP_ENV.value,
        "service.version": __version__,
    })

    # 2. Configure Tracer Provider
    trace_provider = TracerProvider(resource=resource)

    # 3. Configure Exporter
    otlp_exporter = OTLPSpanExporter(endpoint=f"{settings.OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    # 4. Optional: Console Exporter for local Debugging
    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    # 5. Set Global Provider
    trace.set_tracer_provider(trace_provider)
    return True

def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in specific modules.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("neighbor_index.build"):
            ...
    """
    return trace.get_tracer(name)
