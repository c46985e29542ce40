from skystick.protocol.types import (
    VELOCITY_CONTROL_MODES,
    AxisClass,
    Channel,
    ControlFrame,
    ControlModeSnapshot,
    Direction,
    RollPitchControlMode,
    VerticalControlMode,
    YawControlMode,
)
from skystick.protocol.wire import (
    CommandCompleted,
    KinematicLimits,
    limits_from_mapping,
    replace_limits,
)

__all__ = [
    "Direction",
    "AxisClass",
    "Channel",
    "ControlFrame",
    "ControlModeSnapshot",
    "VerticalControlMode",
    "YawControlMode",
    "RollPitchControlMode",
    "VELOCITY_CONTROL_MODES",
    "KinematicLimits",
    "CommandCompleted",
    "limits_from_mapping",
    "replace_limits",
]
