"""Unit tests for direction to control-channel mapping."""

import math
from collections import defaultdict

import pytest

from skystick.motion.axes import axis_for
from skystick.protocol.types import AxisClass, Channel, ControlFrame, Direction
from skystick.utils.errors import ValidationError

pytestmark = pytest.mark.unit


class TestAxisMapping:
    @pytest.mark.parametrize(
        "direction, channel, sign, axis_class",
        [
            (Direction.FORWARD, Channel.LONGITUDINAL, 1.0, AxisClass.LINEAR),
            (Direction.BACKWARD, Channel.LONGITUDINAL, -1.0, AxisClass.LINEAR),
            (Direction.RIGHT, Channel.LATERAL, 1.0, AxisClass.LINEAR),
            (Direction.LEFT, Channel.LATERAL, -1.0, AxisClass.LINEAR),
            (Direction.UP, Channel.VERTICAL_RATE, 1.0, AxisClass.LINEAR),
            (Direction.DOWN, Channel.VERTICAL_RATE, -1.0, AxisClass.LINEAR),
            (Direction.CLOCKWISE, Channel.ANGULAR_RATE, 1.0, AxisClass.ANGULAR),
            (Direction.COUNTER_CLOCKWISE, Channel.ANGULAR_RATE, -1.0, AxisClass.ANGULAR),
        ],
    )
    def test_binding(self, direction, channel, sign, axis_class):
        binding = axis_for(direction)
        assert binding.channel is channel
        assert binding.sign == sign
        assert binding.axis_class is axis_class

    def test_every_channel_has_an_opposing_pair(self):
        by_channel = defaultdict(list)
        for direction in Direction:
            binding = axis_for(direction)
            by_channel[binding.channel].append(binding.sign)
        assert set(by_channel) == set(Channel)
        for signs in by_channel.values():
            assert sorted(signs) == [-1.0, 1.0]

    def test_frame_sets_only_the_bound_channel(self):
        frame = axis_for(Direction.LEFT).frame_for(0.5)
        assert frame == ControlFrame(lateral=-0.5)
        assert frame.active_channels() == [Channel.LATERAL]

    def test_zero_is_positive_zero(self):
        frame = axis_for(Direction.BACKWARD).frame_for(0.0)
        assert frame.is_stop
        assert math.copysign(1.0, frame.longitudinal) == 1.0


class TestDirectionParsing:
    def test_from_string(self):
        assert Direction.from_string("counter-clockwise") is Direction.COUNTER_CLOCKWISE
        assert Direction.from_string("Forward") is Direction.FORWARD

    def test_unknown_direction(self):
        with pytest.raises(ValidationError, match="Unknown direction"):
            Direction.from_string("sideways")

    @pytest.mark.parametrize("name", [3, None, Direction.UP])
    def test_non_string_direction(self, name):
        with pytest.raises(ValidationError, match="Direction must be a string"):
            Direction.from_string(name)
