# src/eigenpath/runtime/sampling.py
from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

__all__ = ["SamplingPlan", "plan_samples", "PATH_RESOLUTION", "DEFAULT_PRECISION"]

# upper bound on the sample spacing: at least this many samples per unit of t
PATH_RESOLUTION = 100
DEFAULT_PRECISION = 0.01


@dataclass(frozen=True)
class SamplingPlan:
    """
    Evenly spaced sample times over [start_t, end_t], both ends included.

    ``times`` is empty when the range is not positive; callers report that as
    a configuration error rather than substituting a default range.
    """
    start_t: float
    end_t: float
    times: np.ndarray
    total_steps: int

    @property
    def range(self) -> float:
        return self.end_t - self.start_t

    @property
    def ok(self) -> bool:
        return self.total_steps > 0

    def __len__(self) -> int:
        return int(self.times.shape[0])

    def progress(self, t: float) -> float:
        """Fraction of the range covered at time t (unclamped)."""
        if not self.ok:
            return 0.0
        return (float(t) - self.start_t) / self.range


def plan_samples(start_t: float, end_t: float, precision: float = DEFAULT_PRECISION) -> SamplingPlan:
    """
    Build the sample times for [start_t, end_t].

    The effective step is ``min(precision, 1 / PATH_RESOLUTION)``; a
    non-finite or non-positive precision falls back to DEFAULT_PRECISION.
    Each sample is computed as ``start_t + (i / steps) * range`` so the last
    sample equals ``end_t`` exactly.
    """
    start_t = float(start_t)
    end_t = float(end_t)
    span = end_t - start_t
    if not math.isfinite(span) or span <= 0:
        return SamplingPlan(start_t, end_t, np.empty((0,), dtype=np.float64), 0)

    precision = float(precision)
    safe_precision = precision if math.isfinite(precision) and precision > 0 else DEFAULT_PRECISION
    step = min(safe_precision, 1.0 / PATH_RESOLUTION)

    total_steps = max(1, math.ceil(span / step))
    times = start_t + (np.arange(total_steps + 1, dtype=np.float64) / total_steps) * span
    times[-1] = end_t
    times.flags.writeable = False
    return SamplingPlan(start_t, end_t, times, int(total_steps))
