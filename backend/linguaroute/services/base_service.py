"""Base service class with OpenTelemetry integration"""

from contextlib import contextmanager
from typing import Any, Dict
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..core.logger import CentralizedLogger

class BaseService:
    """Base service class with automatic tracing and logging"""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.tracer = trace.get_tracer(service_name)
        self.logger = CentralizedLogger(service_name)

    @contextmanager
    def traced_operation(self, operation_name: str, **attributes):
        """Context manager for traced operations"""
        with self.tracer.start_as_current_span(operation_name) as span:
            span.set_attributes({
                "service.name": self.service_name,
                "operation.name": operation_name,
                **self._span_attributes(attributes)
            })

            try:
                self.logger.debug(f"Starting {operation_name}",
                                  extra={"attributes": attributes})
                yield span
                span.set_status(Status(StatusCode.OK))
                self.logger.debug(f"Completed {operation_name}")
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                self.logger.error(f"Error in {operation_name}: {str(e)}")
                raise

    @staticmethod
    def _span_attributes(attributes: Dict[str, Any]) -> Dict[str, Any]:
        # OTel attributes must be primitives; drop unset ones
        return {
            key: value if isinstance(value, (str, bool, int, float)) else str(value)
            for key, value in attributes.items()
            if value is not None
        }
