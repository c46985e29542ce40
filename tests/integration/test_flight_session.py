"""
Integration tests for a full simulated flight.

Drives takeoff, moves with every profile, and landing through the
controller against a SimulatedActuator with threaded acknowledgements.
"""

import pytest

from skystick.control.simulated import DEFAULT_MODES
from skystick.protocol.types import Channel


@pytest.mark.integration
class TestFlightSession:
    @pytest.mark.asyncio
    async def test_takeoff_move_land(self, controller, actuator):
        assert (await controller.takeoff()).completed
        assert (await controller.move_up(0.2)).completed
        assert (await controller.rotate_clockwise(20.0)).completed
        assert (await controller.land()).completed
        assert (await controller.confirm_landing()).completed

        assert actuator.flying is False
        assert actuator.sticks_enabled is False
        assert actuator.modes == DEFAULT_MODES

    @pytest.mark.asyncio
    @pytest.mark.parametrize("profile", ["CONSTANT", "TRAPEZOIDAL", "S_CURVE"])
    async def test_every_profile_commands_the_distance(self, controller, actuator, profile):
        assert controller.set_profile(profile).completed

        result = await controller.move_backward(0.8)

        assert result.completed, result.error_description
        assert actuator.frames[-1].is_stop
        # Left Riemann sum of the samples: within two periods at peak speed
        assert actuator.commanded_displacement(Channel.LONGITUDINAL, 0.005) == pytest.approx(
            -0.8, abs=2 * 2.0 * 0.005
        )

    @pytest.mark.asyncio
    async def test_ramped_profiles_start_and_end_at_rest(self, controller, actuator):
        controller.set_profile("S_CURVE")

        await controller.move_right(0.8)

        lateral = [f.lateral for f in actuator.frames]
        assert lateral[0] == 0.0
        assert lateral[-1] == 0.0
        assert max(lateral) == pytest.approx(0.4, rel=1e-6)
