"""
Instrumentation module for fold benchmarking.

Provides timing utilities and tracing integration.
"""

from .timing import (
    Clock,
    Timer,
    timed,
)

from .traces import (
    Tracer,
    TracingConfig,
    OTEL_AVAILABLE,
)

__all__ = [
    # Timing
    "Clock",
    "Timer",
    "timed",
    # Tracing
    "Tracer",
    "TracingConfig",
    "OTEL_AVAILABLE",
]
