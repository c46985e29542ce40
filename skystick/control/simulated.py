"""
In-process actuator simulation for testing and dry runs.

SimulatedActuator keeps the same state a flight controller would expose to
the motion pipeline (virtual-stick flag, control modes, received frames) and
can be told to refuse any acknowledged call.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field

from skystick.control.actuator import AckCallback, ValueCallback
from skystick.protocol.types import (
    Channel,
    ControlFrame,
    ControlModeSnapshot,
    RollPitchControlMode,
    VerticalControlMode,
    YawControlMode,
)

logger = logging.getLogger(__name__)

DEFAULT_MODES = ControlModeSnapshot(
    vertical=VerticalControlMode.POSITION,
    yaw=YawControlMode.ANGLE,
    roll_pitch=RollPitchControlMode.ANGLE,
)


@dataclass
class SimulatedActuator:
    """
    Recording actuator.

    Attributes:
        ack_delay: Seconds before acknowledging; > 0 acknowledges from a timer thread
        enable_error / disable_error: Error reported when enabling / disabling sticks
        takeoff_error / landing_error / confirm_landing_error: Flight command errors
        landing_protection_error: Error reported when changing landing protection
        landing_protection_unreadable: Report the landing protection read as failed
        frame_error_after: Raise from send_control_frame after this many frames
    """

    ack_delay: float = 0.0
    enable_error: str | None = None
    disable_error: str | None = None
    takeoff_error: str | None = None
    landing_error: str | None = None
    confirm_landing_error: str | None = None
    landing_protection_error: str | None = None
    landing_protection_unreadable: bool = False
    frame_error_after: int | None = None

    modes: ControlModeSnapshot = DEFAULT_MODES
    sticks_enabled: bool = False
    flying: bool = False
    landing_protection: bool = True
    frames: list[ControlFrame] = field(default_factory=list)
    frame_times: list[float] = field(default_factory=list)
    # (call, argument) in call order
    calls: list[tuple[str, object]] = field(default_factory=list)

    def _ack(self, callback: AckCallback | ValueCallback, value: object) -> None:
        if self.ack_delay > 0.0:
            timer = threading.Timer(self.ack_delay, callback, args=(value,))
            timer.daemon = True
            timer.start()
        else:
            callback(value)

    # ----- Actuator interface -----

    def send_control_frame(self, frame: ControlFrame) -> None:
        if self.frame_error_after is not None and len(self.frames) >= self.frame_error_after:
            logger.debug("SimulatedActuator: dropping frame after %d sent", len(self.frames))
            raise RuntimeError("Flight controller link lost")
        self.calls.append(("send_control_frame", frame))
        self.frames.append(frame)
        self.frame_times.append(time.monotonic())

    def set_velocity_control_enabled(self, enabled: bool, callback: AckCallback) -> None:
        self.calls.append(("set_velocity_control_enabled", enabled))
        error = self.enable_error if enabled else self.disable_error
        logger.debug("SimulatedActuator: virtual sticks %s -> %s", enabled, error or "ok")
        if error is None:
            self.sticks_enabled = enabled
        self._ack(callback, error)

    def is_virtual_stick_enabled(self) -> bool:
        self.calls.append(("is_virtual_stick_enabled", None))
        return self.sticks_enabled

    def get_control_modes(self) -> ControlModeSnapshot:
        self.calls.append(("get_control_modes", self.modes))
        return self.modes

    def set_control_modes(self, modes: ControlModeSnapshot) -> None:
        self.calls.append(("set_control_modes", modes))
        self.modes = modes

    def start_takeoff(self, callback: AckCallback) -> None:
        self.calls.append(("start_takeoff", None))
        if self.takeoff_error is None:
            self.flying = True
        self._ack(callback, self.takeoff_error)

    def start_landing(self, callback: AckCallback) -> None:
        self.calls.append(("start_landing", None))
        self._ack(callback, self.landing_error)

    def confirm_landing(self, callback: AckCallback) -> None:
        self.calls.append(("confirm_landing", None))
        if self.confirm_landing_error is None:
            self.flying = False
        self._ack(callback, self.confirm_landing_error)

    def set_landing_protection_enabled(self, enabled: bool, callback: AckCallback) -> None:
        self.calls.append(("set_landing_protection_enabled", enabled))
        if self.landing_protection_error is None:
            self.landing_protection = enabled
        self._ack(callback, self.landing_protection_error)

    def get_landing_protection_enabled(self, callback: ValueCallback) -> None:
        self.calls.append(("get_landing_protection_enabled", None))
        self._ack(callback, None if self.landing_protection_unreadable else self.landing_protection)

    # ----- Inspection helpers -----

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def commanded_displacement(self, channel: Channel, period: float) -> float:
        """Distance (or angle) the received frames command on one channel."""
        return sum(f.value(channel) for f in self.frames) * period

    def reset(self) -> None:
        self.frames.clear()
        self.frame_times.clear()
        self.calls.clear()
