"""
Skystick Python Package

Kinematic motion profiles and fixed-cadence virtual-stick command streaming
for multirotor flight controllers.

Key components:
- MotionController: Validated single-axis moves and flight commands
- SimulatedActuator: In-memory actuator for tests and dry runs
- KinematicLimits: Speed, acceleration and jerk limits per axis class
- ProfileKind: CONSTANT, TRAPEZOIDAL or S_CURVE velocity shaping
"""

from ._version import __version__
from .control import Actuator, MotionController, SimulatedActuator
from .motion import MotionPlan, ProfileKind
from .protocol import CommandCompleted, ControlFrame, Direction, KinematicLimits

__all__ = [
    "__version__",
    "MotionController",
    "Actuator",
    "SimulatedActuator",
    "MotionPlan",
    "ProfileKind",
    "Direction",
    "ControlFrame",
    "KinematicLimits",
    "CommandCompleted",
]
