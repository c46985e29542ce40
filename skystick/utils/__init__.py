from skystick.utils.errors import (
    ActuatorUnavailable,
    ControlTransitionError,
    DegenerateProfileError,
    SkystickError,
    ValidationError,
)

__all__ = [
    "SkystickError",
    "ValidationError",
    "ActuatorUnavailable",
    "ControlTransitionError",
    "DegenerateProfileError",
]
