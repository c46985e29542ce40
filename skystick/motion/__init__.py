"""
Motion pipeline for single-axis virtual-stick moves.

A request is solved into a closed-form velocity profile (CONSTANT,
TRAPEZOIDAL or S_CURVE), sampled at the command period, mapped onto one
control channel and streamed by the CommandDispatcher.
"""

from skystick.motion.axes import AxisBinding, axis_for
from skystick.motion.dispatcher import CommandDispatcher
from skystick.motion.plan import MotionPlan, MotionRequest, build_motion_plan
from skystick.motion.profiles import (
    ProfileKind,
    ProfileSolver,
    VelocityProfile,
    solve_profile,
)
from skystick.motion.sampler import sample_count, sample_velocity

__all__ = [
    # Profiles
    "ProfileKind",
    "ProfileSolver",
    "VelocityProfile",
    "solve_profile",
    # Sampling and planning
    "sample_count",
    "sample_velocity",
    "MotionRequest",
    "MotionPlan",
    "build_motion_plan",
    # Axis mapping
    "AxisBinding",
    "axis_for",
    # Streaming
    "CommandDispatcher",
]
