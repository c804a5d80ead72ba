"""
Per-configuration accumulation of successful timing samples.

One Aggregator belongs to one matrix run. Create a fresh instance (or call
``clear``) to start another run.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class ConfigurationStats:
    """Summary statistics for one configuration label."""

    label: str
    sample_count: int
    mean_ms: float
    min_ms: float
    max_ms: float
    p50_ms: float
    p95_ms: float

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "sample_count": self.sample_count,
            "mean_ms": self.mean_ms,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "p50_ms": self.p50_ms,
            "p95_ms": self.p95_ms,
        }


def percentile(sorted_values: list[float], p: float) -> float:
    """Linear-interpolation percentile of an already sorted, non-empty list."""
    k = (len(sorted_values) - 1) * (p / 100)
    f = int(k)
    c = f + 1 if f + 1 < len(sorted_values) else f
    return sorted_values[f] + (k - f) * (sorted_values[c] - sorted_values[f])


class Aggregator:
    """Collects elapsed times keyed by configuration label."""

    def __init__(self):
        self._samples: dict[str, list[float]] = {}

    def register(self, label: str) -> None:
        """Make a label known so it is reported even with zero samples."""
        self._samples.setdefault(label, [])

    def record(self, label: str, elapsed_ms: float) -> None:
        """Append one successful duration to a label."""
        if elapsed_ms < 0 or math.isnan(elapsed_ms):
            raise ValueError(f"elapsed_ms must be a non-negative number, got {elapsed_ms!r}")
        self._samples.setdefault(label, []).append(float(elapsed_ms))

    def merge(self, other: "Aggregator") -> "Aggregator":
        """Fold another aggregator's samples into this one."""
        for label, values in other._samples.items():
            self._samples.setdefault(label, []).extend(values)
        return self

    def clear(self) -> None:
        self._samples.clear()

    def labels(self) -> list[str]:
        """Labels in first-seen order."""
        return list(self._samples.keys())

    def count(self, label: str) -> int:
        return len(self._samples.get(label, ()))

    def samples(self, label: str) -> list[float]:
        return list(self._samples.get(label, ()))

    def summarize(self, label: str) -> Optional[ConfigurationStats]:
        """Statistics over exactly the samples recorded for `label`.

        Returns None when there are no samples; a zero-filled result would
        read as a real measurement.
        """
        values = sorted(self._samples.get(label, ()))
        if not values:
            return None

        lo, hi = values[0], values[-1]
        # fsum is exactly rounded, so the mean does not depend on arrival order
        mean = math.fsum(values) / len(values)
        mean = min(max(mean, lo), hi)

        return ConfigurationStats(
            label=label,
            sample_count=len(values),
            mean_ms=mean,
            min_ms=lo,
            max_ms=hi,
            p50_ms=percentile(values, 50),
            p95_ms=percentile(values, 95),
        )

    def summaries(self, labels: Optional[Iterable[str]] = None) -> dict[str, Optional[ConfigurationStats]]:
        """Summaries for the given labels (default: every known label)."""
        if labels is None:
            labels = self.labels()
        return {label: self.summarize(label) for label in labels}
