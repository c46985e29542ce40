from skystick.control.actuator import (
    AckCallback,
    Actuator,
    ValueCallback,
    await_acknowledgement,
    await_value,
)
from skystick.control.controller import MotionController
from skystick.control.guards import control_mode_guard, set_virtual_sticks, stick_session
from skystick.control.simulated import SimulatedActuator

__all__ = [
    "Actuator",
    "AckCallback",
    "ValueCallback",
    "await_acknowledgement",
    "await_value",
    "set_virtual_sticks",
    "stick_session",
    "control_mode_guard",
    "MotionController",
    "SimulatedActuator",
]
