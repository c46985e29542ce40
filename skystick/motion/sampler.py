"""Discretization of a continuous velocity function into command samples."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from skystick.utils.errors import ValidationError


def sample_count(duration: float, period: float) -> int:
    """Number of k >= 0 with k * period < duration."""
    n = max(0, math.ceil(duration / period))
    # ceil() of a rounded quotient can be off by one in either direction
    while n > 0 and (n - 1) * period >= duration:
        n -= 1
    while n * period < duration:
        n += 1
    return n


def sample_velocity(
    velocity: Callable[[float], float],
    duration: float,
    period: float,
) -> NDArray[np.float64]:
    """
    Sample velocity at t = 0, period, 2*period, ... while t < duration.

    A single terminal 0.0 is appended, so the result is never empty and
    always ends at rest.

    Args:
        velocity: Velocity as a function of elapsed time
        duration: Motion duration in seconds (half-open interval [0, duration))
        period: Sampling period in seconds

    Returns:
        1-D float64 array of length sample_count(duration, period) + 1
    """
    if not math.isfinite(period) or period <= 0.0:
        raise ValidationError(f"Sampling period must be a positive number, got {period!r}")
    if not math.isfinite(duration) or duration < 0.0:
        raise ValidationError(f"Duration must be a non-negative number, got {duration!r}")

    n = sample_count(duration, period)
    times = np.arange(n, dtype=np.float64) * period
    out = np.zeros(n + 1, dtype=np.float64)
    for i, t in enumerate(times):
        out[i] = velocity(float(t))
    return out
