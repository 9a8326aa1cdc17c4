"""OpenTelemetry setup and configuration"""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from .config import get_settings

def setup_telemetry() -> bool:
    """Initialize OpenTelemetry tracing and httpx instrumentation

    Returns:
        True if telemetry was installed, False when disabled
    """
    settings = get_settings()

    if not settings.telemetry.enabled:
        return False

    resource = Resource.create({
        "service.name": settings.telemetry.service_name,
        "service.version": settings.app_version,
        "deployment.environment": settings.environment,
    })

    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)

    otlp_exporter = OTLPSpanExporter(
        endpoint=settings.telemetry.otlp_endpoint,
        insecure=True
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    # Every provider request goes through httpx
    HTTPXClientInstrumentor().instrument()
    return True

def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance"""
    return trace.get_tracer(name)
