"""
Validated message structs for skystick configuration and results.

Structs are msgspec types so that the same constraints apply whether a value
is built in-process or decoded from a transport:
- KinematicLimits: six strictly positive limits
- CommandCompleted: result of every exposed operation
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Annotated, Any

import msgspec

from skystick import config as cfg
from skystick.protocol.types import AxisClass
from skystick.utils.errors import ValidationError

logger = logging.getLogger(__name__)

PositiveFloat = Annotated[float, msgspec.Meta(gt=0.0)]


class KinematicLimits(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    """Speed, acceleration and jerk limits for linear (m) and angular (deg) motion."""

    max_speed: PositiveFloat = cfg.DEFAULT_MAX_SPEED
    max_angular_speed: PositiveFloat = cfg.DEFAULT_MAX_ANGULAR_SPEED
    max_acceleration: PositiveFloat = cfg.DEFAULT_MAX_ACCELERATION
    max_angular_acceleration: PositiveFloat = cfg.DEFAULT_MAX_ANGULAR_ACCELERATION
    max_jerk: PositiveFloat = cfg.DEFAULT_MAX_JERK
    max_angular_jerk: PositiveFloat = cfg.DEFAULT_MAX_ANGULAR_JERK

    def __post_init__(self) -> None:
        # Meta constraints only run on decode/convert; direct construction lands here too
        for name in self.__struct_fields__:
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValidationError(f"{name} must be a positive finite number, got {value!r}")

    def for_axis(self, axis_class: AxisClass) -> tuple[float, float, float]:
        """Return (speed, acceleration, jerk) limits for the axis class."""
        if axis_class is AxisClass.ANGULAR:
            return self.max_angular_speed, self.max_angular_acceleration, self.max_angular_jerk
        return self.max_speed, self.max_acceleration, self.max_jerk

    def to_dict(self) -> dict[str, float]:
        return msgspec.structs.asdict(self)


def limits_from_mapping(data: Mapping[str, Any]) -> KinematicLimits:
    """
    Build KinematicLimits from a mapping, applying all field constraints.

    Missing fields take their defaults, numeric strings are accepted, unknown
    keys are rejected.

    Raises:
        ValidationError: If a value is not a positive finite number or a key is unknown
    """
    try:
        return msgspec.convert(dict(data), KinematicLimits, strict=False)
    except msgspec.ValidationError as e:
        raise ValidationError(str(e)) from e


def replace_limits(limits: KinematicLimits, **changes: Any) -> KinematicLimits:
    """Return a validated copy of limits with the given fields replaced."""
    merged = limits.to_dict()
    merged.update(changes)
    return limits_from_mapping(merged)


class CommandCompleted(msgspec.Struct, frozen=True):
    """Outcome of an exposed operation."""

    completed: bool
    error_description: str | None = None

    @classmethod
    def ok(cls) -> CommandCompleted:
        return cls(True, None)

    @classmethod
    def failed(cls, error: BaseException | str) -> CommandCompleted:
        return cls(False, str(error))


# Module-level JSON codec (thread-safe, reusable)
_json_encoder = msgspec.json.Encoder()
_completed_decoder = msgspec.json.Decoder(CommandCompleted)


def encode_json(obj: Any) -> bytes:
    return _json_encoder.encode(obj)


def decode_completed(data: bytes) -> CommandCompleted:
    return _completed_decoder.decode(data)
