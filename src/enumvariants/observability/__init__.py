"""
Observability: logging and metrics for generation passes.

Provides:
- Logging tagged with the type being generated
- Metrics collection (counters, histograms)
"""

from enumvariants.observability.logging import (
    set_target,
    get_target,
    configure_logging,
    get_logger,
    LogContext,
    JSONFormatter,
    ReadableFormatter,
)
from enumvariants.observability.metrics import (
    Counter,
    Histogram,
    MetricsRegistry,
    get_metrics,
    reset_metrics,
)

__all__ = [
    # Logging
    "set_target",
    "get_target",
    "configure_logging",
    "get_logger",
    "LogContext",
    "JSONFormatter",
    "ReadableFormatter",
    # Metrics
    "Counter",
    "Histogram",
    "MetricsRegistry",
    "get_metrics",
    "reset_metrics",
]
