"""
Closed-form velocity profiles for single-axis motion.

Three shaping strategies are available:
- CONSTANT: cruise at the speed limit for the whole move.
- TRAPEZOIDAL: constant-acceleration ramp up, cruise, ramp down.
- S_CURVE: jerk-limited seven-phase profile (jerk-up, constant accel,
  jerk-down, cruise, and the mirrored deceleration).

Each solve returns a VelocityProfile: the phase durations and a continuous
velocity function of elapsed time. Solving never samples; see
skystick.motion.sampler for discretization.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import assert_never

import numpy as np
from numpy.typing import NDArray

from skystick.config import PHASE_TOLERANCE_S, SCURVE_ACCEL_RATIO
from skystick.protocol.types import AxisClass
from skystick.protocol.wire import KinematicLimits
from skystick.utils.errors import DegenerateProfileError, ValidationError

logger = logging.getLogger(__name__)


class ProfileKind(Enum):
    """Available velocity-shaping strategies."""

    CONSTANT = "CONSTANT"
    TRAPEZOIDAL = "TRAPEZOIDAL"
    S_CURVE = "S_CURVE"

    @classmethod
    def from_string(cls, name: str) -> ProfileKind:
        """Convert string to ProfileKind, case-insensitive."""
        if not isinstance(name, str):
            raise ValidationError(f"Profile must be a string, got {name!r}")
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(f"'{k.value}'" for k in cls)
            raise ValidationError(
                f"Unknown profile '{name}'. Profile must be one of {valid}"
            ) from None


@dataclass(frozen=True)
class VelocityProfile:
    """
    Solved single-axis velocity profile.

    Attributes:
        kind: Strategy that produced the profile
        axis_class: Limit triple the profile was solved against
        magnitude: Requested distance (m) or angle (deg)
        peak_velocity: Cruise speed reached by the profile
        phase_durations: Duration of each phase in seconds (1, 3 or 7 phases)
    """

    kind: ProfileKind
    axis_class: AxisClass
    magnitude: float
    peak_velocity: float
    phase_durations: tuple[float, ...]
    _velocity_fn: Callable[[float], float] = field(repr=False, compare=False)

    @property
    def duration(self) -> float:
        return sum(self.phase_durations)

    @property
    def phase_boundaries(self) -> NDArray[np.float64]:
        """End time of every phase; the last entry equals the duration."""
        return np.cumsum(np.asarray(self.phase_durations, dtype=np.float64))

    def velocity(self, t: float) -> float:
        """Velocity at elapsed time t; zero outside [0, duration]."""
        if t < 0.0 or t > self.duration:
            return 0.0
        return self._velocity_fn(t)

    __call__ = velocity


class ProfileSolver:
    """
    Solves phase durations for a requested move.

    Any phase shorter than -tolerance is rejected as degenerate instead of
    being sampled; smaller negatives are rounding noise and clamp to zero.
    """

    def __init__(self, tolerance: float = PHASE_TOLERANCE_S) -> None:
        self.tolerance = tolerance

    def solve(
        self,
        magnitude: float,
        axis_class: AxisClass,
        limits: KinematicLimits,
        kind: ProfileKind,
    ) -> VelocityProfile:
        """
        Solve the profile for a move of the given magnitude.

        Args:
            magnitude: Distance (m) for linear axes, angle (deg) for angular axes
            axis_class: Selects the linear or angular limit triple
            limits: Kinematic limits captured for this move
            kind: Velocity-shaping strategy

        Returns:
            VelocityProfile with validated, non-negative phase durations

        Raises:
            ValidationError: If magnitude is not a positive finite number
            DegenerateProfileError: If a phase duration comes out negative
        """
        if not math.isfinite(magnitude) or magnitude <= 0.0:
            raise ValidationError(f"Magnitude must be a positive number, got {magnitude!r}")

        speed, accel, jerk = limits.for_axis(axis_class)

        match kind:
            case ProfileKind.CONSTANT:
                profile = self._solve_constant(magnitude, axis_class, speed)
            case ProfileKind.TRAPEZOIDAL:
                profile = self._solve_trapezoidal(magnitude, axis_class, speed, accel)
            case ProfileKind.S_CURVE:
                profile = self._solve_s_curve(magnitude, axis_class, speed, accel, jerk)
            case _:
                assert_never(kind)

        logger.debug(
            "Solved %s profile: magnitude=%.4g peak=%.4g duration=%.4fs phases=%s",
            kind.value,
            magnitude,
            profile.peak_velocity,
            profile.duration,
            ", ".join(f"{d:.4f}" for d in profile.phase_durations),
        )
        return profile

    def _check_phases(self, kind: ProfileKind, durations: tuple[float, ...]) -> tuple[float, ...]:
        checked = []
        for i, dt in enumerate(durations, start=1):
            if not math.isfinite(dt) or dt < -self.tolerance:
                raise DegenerateProfileError(
                    f"{kind.value} profile phase {i} has invalid duration {dt:.6g} s; "
                    "limits are too large for this magnitude",
                    phase=i,
                )
            checked.append(max(dt, 0.0))
        if sum(checked) <= 0.0:
            raise DegenerateProfileError(f"{kind.value} profile has zero duration")
        return tuple(checked)

    def _solve_constant(
        self, magnitude: float, axis_class: AxisClass, speed: float
    ) -> VelocityProfile:
        durations = self._check_phases(ProfileKind.CONSTANT, (magnitude / speed,))

        def v(t: float) -> float:
            return speed

        return VelocityProfile(ProfileKind.CONSTANT, axis_class, magnitude, speed, durations, v)

    def _solve_trapezoidal(
        self, magnitude: float, axis_class: AxisClass, speed: float, accel: float
    ) -> VelocityProfile:
        a = accel
        # Capping cruise speed at half the magnitude keeps short moves from overshooting
        v_max = min(magnitude / 2.0, speed)

        t1, t2, t3 = self._check_phases(
            ProfileKind.TRAPEZOIDAL,
            (
                v_max / a,
                (a * magnitude - v_max**2) / (a * v_max),
                v_max / a,
            ),
        )

        def v(t: float) -> float:
            if t <= t1:
                return a * t
            if t <= t1 + t2:
                return v_max
            return v_max - a * (t - t1 - t2)

        return VelocityProfile(
            ProfileKind.TRAPEZOIDAL, axis_class, magnitude, v_max, (t1, t2, t3), v
        )

    def _solve_s_curve(
        self,
        magnitude: float,
        axis_class: AxisClass,
        speed: float,
        accel: float,
        jerk: float,
    ) -> VelocityProfile:
        j = jerk
        v_max = min(magnitude / 2.0, speed)
        a_max = min(SCURVE_ACCEL_RATIO * v_max, accel)

        # Velocity gained during one jerk ramp
        dv_jerk = a_max**2 / (2.0 * j)

        # Velocity at the end of each phase
        vf1 = dv_jerk
        vf2 = v_max - dv_jerk
        vf3 = v_max
        vf4 = v_max
        vf5 = v_max - dv_jerk
        vf6 = dv_jerk

        t_jerk = a_max / j
        phases = self._check_phases(
            ProfileKind.S_CURVE,
            (
                t_jerk,
                (vf2 - vf1) / a_max,
                t_jerk,
                (a_max * j * magnitude - v_max * a_max**2 - j * v_max**2) / (j * a_max * v_max),
                t_jerk,
                (vf5 - vf6) / a_max,
                t_jerk,
            ),
        )
        ends = [float(b) for b in np.cumsum(phases)]

        def v(t: float) -> float:
            if t <= ends[0]:
                return j * t**2 / 2.0
            if t <= ends[1]:
                tc = t - ends[0]
                return vf1 + a_max * tc
            if t <= ends[2]:
                tc = t - ends[1]
                return vf2 + a_max * tc - j * tc**2 / 2.0
            if t <= ends[3]:
                return vf3
            if t <= ends[4]:
                tc = t - ends[3]
                return vf4 - j * tc**2 / 2.0
            if t <= ends[5]:
                tc = t - ends[4]
                return vf5 - a_max * tc
            tc = t - ends[5]
            return vf6 - a_max * tc + j * tc**2 / 2.0

        return VelocityProfile(ProfileKind.S_CURVE, axis_class, magnitude, v_max, phases, v)


_default_solver = ProfileSolver()


def solve_profile(
    magnitude: float,
    axis_class: AxisClass,
    limits: KinematicLimits,
    kind: ProfileKind,
) -> VelocityProfile:
    """Solve with the module-level ProfileSolver."""
    return _default_solver.solve(magnitude, axis_class, limits, kind)
