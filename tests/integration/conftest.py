"""Integration test fixtures."""

import pytest

from skystick.control.controller import MotionController
from skystick.control.simulated import SimulatedActuator
from skystick.protocol.wire import KinematicLimits


@pytest.fixture
def actuator():
    """Simulated drone acknowledging from a timer thread, like a real SDK callback."""
    return SimulatedActuator(ack_delay=0.002)


@pytest.fixture
def controller(actuator):
    """
    Controller with fast limits and a 5 ms period so each profile finishes quickly.

    Ramp limits stay high enough that TRAPEZOIDAL and S_CURVE remain
    well-formed for sub-metre moves.
    """
    limits = KinematicLimits(
        max_speed=2.0,
        max_angular_speed=180.0,
        max_acceleration=40.0,
        max_angular_acceleration=3600.0,
        max_jerk=800.0,
        max_angular_jerk=72000.0,
    )
    return MotionController(actuator, limits=limits, profile="TRAPEZOIDAL", period=0.005)
