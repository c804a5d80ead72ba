"""
Tracing utilities for fold benchmarking.

Provides optional OpenTelemetry spans around matrix cells and
micro-benchmark comparisons.
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Optional

# OpenTelemetry imports - optional dependency
try:
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import (
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.trace import Status, StatusCode
    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False


class TracingConfig:
    """Configuration for tracing setup."""

    def __init__(
        self,
        service_name: str = "foldbench",
        enabled: Optional[bool] = None,
        enable_console_export: bool = True,
    ):
        self.service_name = service_name
        if enabled is None:
            enabled = os.getenv("FOLDBENCH_TRACE", "").lower() in ("1", "true", "yes")
        self.enabled = enabled
        self.enable_console_export = enable_console_export


class Tracer:
    """OpenTelemetry tracer; spans are no-ops when disabled or unavailable."""

    def __init__(self, config: Optional[TracingConfig] = None):
        self.config = config or TracingConfig()
        self._provider = None
        self._otel_tracer = None
        self._initialized = False

    @property
    def active(self) -> bool:
        return self._otel_tracer is not None

    def initialize(self) -> "Tracer":
        """Initialize the tracing backend."""
        if self._initialized:
            return self

        if OTEL_AVAILABLE and self.config.enabled:
            resource = Resource.create({"service.name": self.config.service_name})
            # Private provider: no process-wide registration
            self._provider = TracerProvider(resource=resource)

            if self.config.enable_console_export:
                processor = SimpleSpanProcessor(ConsoleSpanExporter())
                self._provider.add_span_processor(processor)

            self._otel_tracer = self._provider.get_tracer(self.config.service_name)

        self._initialized = True
        return self

    def shutdown(self) -> None:
        """Shutdown the tracing backend."""
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
            self._otel_tracer = None
        self._initialized = False

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ) -> Iterator[Any]:
        """Create a traced span.

        Usage:
            with tracer.span("cell", {"label": "default"}) as span:
                # do work
                if span:
                    span.set_attribute("outcome", "success")
        """
        if not self._initialized:
            self.initialize()

        span_obj = None
        if self._otel_tracer:
            span_obj = self._otel_tracer.start_span(name)
            if attributes:
                for key, value in attributes.items():
                    span_obj.set_attribute(key, value)

        try:
            yield span_obj
        except Exception as e:
            if span_obj:
                span_obj.set_status(Status(StatusCode.ERROR, str(e)))
                span_obj.record_exception(e)
            raise
        finally:
            if span_obj:
                span_obj.end()
