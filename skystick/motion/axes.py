"""
Direction to control-channel mapping.

Every Direction resolves to exactly one (axis class, channel, sign) binding:
forward/backward drive the longitudinal channel, right/left the lateral one,
up/down the vertical rate and clockwise/counter-clockwise the angular rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from skystick.protocol.types import AxisClass, Channel, ControlFrame, Direction


@dataclass(slots=True, frozen=True)
class AxisBinding:
    axis_class: AxisClass
    channel: Channel
    sign: float

    def frame_for(self, value: float) -> ControlFrame:
        """Frame with the bound channel set to the signed value, others zero."""
        # + 0.0 folds -0.0 into 0.0
        signed = self.sign * float(value) + 0.0
        return ControlFrame(**{self.channel.value: signed})


def axis_for(direction: Direction) -> AxisBinding:
    """Map a direction to its axis class and signed control channel."""
    match direction:
        case Direction.FORWARD:
            return AxisBinding(AxisClass.LINEAR, Channel.LONGITUDINAL, 1.0)
        case Direction.BACKWARD:
            return AxisBinding(AxisClass.LINEAR, Channel.LONGITUDINAL, -1.0)
        case Direction.RIGHT:
            return AxisBinding(AxisClass.LINEAR, Channel.LATERAL, 1.0)
        case Direction.LEFT:
            return AxisBinding(AxisClass.LINEAR, Channel.LATERAL, -1.0)
        case Direction.UP:
            return AxisBinding(AxisClass.LINEAR, Channel.VERTICAL_RATE, 1.0)
        case Direction.DOWN:
            return AxisBinding(AxisClass.LINEAR, Channel.VERTICAL_RATE, -1.0)
        case Direction.CLOCKWISE:
            return AxisBinding(AxisClass.ANGULAR, Channel.ANGULAR_RATE, 1.0)
        case Direction.COUNTER_CLOCKWISE:
            return AxisBinding(AxisClass.ANGULAR, Channel.ANGULAR_RATE, -1.0)
        case _:
            assert_never(direction)
