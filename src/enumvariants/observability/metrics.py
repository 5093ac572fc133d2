"""
Metrics: simple counters and histograms for generation passes.
"""

from dataclasses import dataclass, field
from threading import Lock
from typing import Any


class Counter:
    """Monotonically increasing counter."""

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._value = 0.0
        self._lock = Lock()

    def inc(self, amount: float = 1.0) -> None:
        """Increment counter."""
        with self._lock:
            self._value += amount

    @property
    def value(self) -> float:
        return self._value

    def reset(self) -> None:
        """Reset counter (for testing)."""
        with self._lock:
            self._value = 0.0


class Histogram:
    """
    Simple histogram for tracking distributions.

    Tracks count, sum, min, max for calculating stats.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._count = 0
        self._sum = 0.0
        self._min = float("inf")
        self._max = float("-inf")
        self._lock = Lock()

    def observe(self, value: float) -> None:
        """Record an observation."""
        with self._lock:
            self._count += 1
            self._sum += value
            self._min = min(self._min, value)
            self._max = max(self._max, value)

    @property
    def count(self) -> int:
        return self._count

    @property
    def sum(self) -> float:
        return self._sum

    @property
    def avg(self) -> float:
        if self._count == 0:
            return 0.0
        return self._sum / self._count

    @property
    def min(self) -> float:
        return self._min if self._count > 0 else 0.0

    @property
    def max(self) -> float:
        return self._max if self._count > 0 else 0.0

    def reset(self) -> None:
        with self._lock:
            self._count = 0
            self._sum = 0.0
            self._min = float("inf")
            self._max = float("-inf")

    def to_dict(self) -> dict[str, float]:
        return {
            "count": self._count,
            "sum": self._sum,
            "avg": self.avg,
            "min": self.min,
            "max": self.max,
        }


@dataclass
class MetricsRegistry:
    """
    Registry for generation metrics.
    """
    types_generated: Counter = field(
        default_factory=lambda: Counter("types_generated", "Types planned successfully")
    )
    generation_failures: Counter = field(
        default_factory=lambda: Counter("generation_failures", "Generation passes aborted")
    )
    variants_resolved: Counter = field(
        default_factory=lambda: Counter("variants_resolved", "Variants resolved")
    )
    operations_synthesized: Counter = field(
        default_factory=lambda: Counter("operations_synthesized", "Operations planned")
    )
    generation_duration_seconds: Histogram = field(
        default_factory=lambda: Histogram("generation_duration_seconds", "Pass duration")
    )

    def to_dict(self) -> dict[str, Any]:
        """Export all metrics as dict."""
        return {
            "types": {
                "generated": self.types_generated.value,
                "failed": self.generation_failures.value,
            },
            "output": {
                "variants_resolved": self.variants_resolved.value,
                "operations_synthesized": self.operations_synthesized.value,
            },
            "duration": self.generation_duration_seconds.to_dict(),
        }

    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        self.types_generated.reset()
        self.generation_failures.reset()
        self.variants_resolved.reset()
        self.operations_synthesized.reset()
        self.generation_duration_seconds.reset()


# Global metrics registry
_metrics = MetricsRegistry()


def get_metrics() -> MetricsRegistry:
    """Get global metrics registry."""
    return _metrics


def reset_metrics() -> None:
    """Reset all metrics (for testing)."""
    _metrics.reset()
