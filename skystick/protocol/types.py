"""
Type definitions for the skystick control protocol.

Defines the direction/axis enums, the four-channel control frame and the
actuator control-mode types used across the public API.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from skystick.utils.errors import ValidationError


class Direction(Enum):
    """Logical direction of a single-axis motion request."""

    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"

    @classmethod
    def from_string(cls, name: str) -> Direction:
        """Convert string to Direction, case-insensitive."""
        if not isinstance(name, str):
            raise ValidationError(f"Direction must be a string, got {name!r}")
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(d.name for d in cls)
            raise ValidationError(
                f"Unknown direction '{name}'. Valid directions: {valid}"
            ) from None


class AxisClass(Enum):
    """Which limit triple governs a direction."""

    LINEAR = "linear"
    ANGULAR = "angular"


class Channel(Enum):
    """Control channels; values are the matching ControlFrame field names."""

    LATERAL = "lateral"
    LONGITUDINAL = "longitudinal"
    ANGULAR_RATE = "angular_rate"
    VERTICAL_RATE = "vertical_rate"


@dataclass(slots=True, frozen=True)
class ControlFrame:
    """One velocity command: signed rates for the four stick channels."""

    lateral: float = 0.0
    longitudinal: float = 0.0
    angular_rate: float = 0.0
    vertical_rate: float = 0.0

    @classmethod
    def stop(cls) -> ControlFrame:
        return cls()

    def value(self, channel: Channel) -> float:
        return getattr(self, channel.value)

    def active_channels(self) -> list[Channel]:
        return [c for c in Channel if self.value(c) != 0.0]

    @property
    def is_stop(self) -> bool:
        return not self.active_channels()

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.lateral, self.longitudinal, self.angular_rate, self.vertical_rate)


class VerticalControlMode(Enum):
    VELOCITY = "velocity"
    POSITION = "position"


class YawControlMode(Enum):
    ANGLE = "angle"
    ANGULAR_VELOCITY = "angular_velocity"


class RollPitchControlMode(Enum):
    ANGLE = "angle"
    VELOCITY = "velocity"


@dataclass(slots=True, frozen=True)
class ControlModeSnapshot:
    """Actuator control modes; None where the actuator reports nothing."""

    vertical: VerticalControlMode | None
    yaw: YawControlMode | None
    roll_pitch: RollPitchControlMode | None


# Modes required while streaming velocity setpoints
VELOCITY_CONTROL_MODES = ControlModeSnapshot(
    vertical=VerticalControlMode.VELOCITY,
    yaw=YawControlMode.ANGULAR_VELOCITY,
    roll_pitch=RollPitchControlMode.VELOCITY,
)
