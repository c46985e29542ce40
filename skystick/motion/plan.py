"""
Motion requests and the frame sequences built from them.

Pipeline:
  1. MotionRequest captures magnitude, direction, profile and limits
  2. axis_for() picks the limit triple and the signed control channel
  3. ProfileSolver produces the continuous velocity profile
  4. sample_velocity() discretizes it at the command period
  5. Each sample becomes a ControlFrame; the last one is the stop frame
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from skystick.motion.axes import AxisBinding, axis_for
from skystick.motion.profiles import ProfileKind, ProfileSolver, VelocityProfile
from skystick.motion.sampler import sample_velocity
from skystick.protocol.types import ControlFrame, Direction
from skystick.protocol.wire import KinematicLimits
from skystick.utils.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MotionRequest:
    """One single-axis move with the configuration captured at request time."""

    magnitude: float
    direction: Direction
    profile: ProfileKind
    limits: KinematicLimits

    def __post_init__(self) -> None:
        if not math.isfinite(self.magnitude) or self.magnitude <= 0.0:
            raise ValidationError(
                f"Non-positive magnitude not allowed, got {self.magnitude!r}"
            )


@dataclass(frozen=True)
class MotionPlan:
    """
    Immutable frame sequence for one request.

    Attributes:
        request: The request the plan was built from
        profile: Solved velocity profile
        binding: Channel and sign the samples are written to
        period: Command period in seconds
        samples: Unsigned velocity samples, terminal zero included
        frames: Control frames, one per sample
    """

    request: MotionRequest
    profile: VelocityProfile
    binding: AxisBinding
    period: float
    samples: NDArray[np.float64]
    frames: tuple[ControlFrame, ...]

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[ControlFrame]:
        return iter(self.frames)

    @property
    def duration(self) -> float:
        return self.profile.duration

    def commanded_displacement(self) -> float:
        """Riemann-sum estimate of the distance (or angle) the frames command."""
        return float(np.sum(self.samples) * self.period)


def build_motion_plan(
    request: MotionRequest,
    period: float,
    solver: ProfileSolver | None = None,
) -> MotionPlan:
    """
    Solve, sample and map a request to control frames.

    Raises:
        ValidationError: If the period is invalid
        DegenerateProfileError: If the limits cannot produce a valid profile
    """
    binding = axis_for(request.direction)
    solver = solver or ProfileSolver()
    profile = solver.solve(request.magnitude, binding.axis_class, request.limits, request.profile)
    samples = sample_velocity(profile.velocity, profile.duration, period)
    samples.flags.writeable = False
    frames = tuple(binding.frame_for(v) for v in samples)

    logger.debug(
        "Planned %s %.4g (%s): %d frames over %.3fs on %s",
        request.direction.name,
        request.magnitude,
        request.profile.value,
        len(frames),
        profile.duration,
        binding.channel.value,
    )
    return MotionPlan(request, profile, binding, period, samples, frames)
