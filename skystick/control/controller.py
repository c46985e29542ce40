"""
MotionController: the public surface for virtual-stick motion.

Each move runs through the same sequence:
  1. Validate the magnitude and check an actuator is attached
  2. Snapshot limits, profile and period into a MotionRequest
  3. Solve and sample the plan (degenerate profiles fail here)
  4. Under the motion lock: enable sticks, install velocity modes,
     stream the frames, restore modes, disable sticks

Moves, flight commands and configuration setters report a CommandCompleted
instead of raising.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Callable, Mapping
from typing import Any

from skystick import config as cfg
from skystick.control.actuator import Actuator, AckCallback, await_acknowledgement, await_value
from skystick.control.guards import control_mode_guard, stick_session
from skystick.motion.dispatcher import CommandDispatcher
from skystick.motion.plan import MotionPlan, MotionRequest, build_motion_plan
from skystick.motion.profiles import ProfileKind, ProfileSolver
from skystick.protocol.types import Direction
from skystick.protocol.wire import (
    CommandCompleted,
    KinematicLimits,
    limits_from_mapping,
    replace_limits,
)
from skystick.utils.errors import (
    ActuatorUnavailable,
    SkystickError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _check_magnitude(magnitude: float) -> float:
    try:
        value = float(magnitude)
    except (TypeError, ValueError):
        raise ValidationError(f"Magnitude must be a number, got {magnitude!r}") from None
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(f"Non-positive magnitude not allowed, got {magnitude!r}")
    return value


class MotionController:
    """
    Runs single-axis moves on an actuator, one at a time.

    Args:
        actuator: Attached flight controller, or None while disconnected
        limits: Initial kinematic limits (defaults from skystick.config)
        profile: Initial profile name or kind
        period: Command period in seconds
        ack_timeout: Bound on each actuator acknowledgement; None waits indefinitely
    """

    def __init__(
        self,
        actuator: Actuator | None = None,
        *,
        limits: KinematicLimits | None = None,
        profile: ProfileKind | str = cfg.DEFAULT_PROFILE,
        period: float = cfg.COMMAND_INTERVAL_S,
        ack_timeout: float | None = cfg.ACK_TIMEOUT_S,
    ) -> None:
        if not math.isfinite(period) or period <= 0.0:
            raise ValidationError(f"Command period must be a positive number, got {period!r}")
        self.actuator = actuator
        self.period = period
        self.ack_timeout = ack_timeout
        self._limits = limits if limits is not None else KinematicLimits()
        self._profile = (
            profile if isinstance(profile, ProfileKind) else ProfileKind.from_string(profile)
        )
        self._solver = ProfileSolver()
        self._lock = asyncio.Lock()
        self.last_dispatcher: CommandDispatcher | None = None

    # --------------- Configuration ---------------

    def get_limits(self) -> KinematicLimits:
        return self._limits

    def set_limits(self, limits: KinematicLimits | Mapping[str, Any]) -> CommandCompleted:
        """
        Replace all six limits at once.

        Mappings are validated as a whole; on failure nothing changes.
        """
        try:
            new = limits if isinstance(limits, KinematicLimits) else limits_from_mapping(limits)
        except ValidationError as e:
            logger.warning("Rejected limits: %s", e)
            return CommandCompleted.failed(e)
        self._limits = new
        logger.info("Limits set: %s", new.to_dict())
        return CommandCompleted.ok()

    def update_limits(self, **changes: Any) -> CommandCompleted:
        """Replace selected limits, e.g. update_limits(max_speed=2.0)."""
        try:
            new = replace_limits(self._limits, **changes)
        except ValidationError as e:
            logger.warning("Rejected limit update %s: %s", changes, e)
            return CommandCompleted.failed(e)
        self._limits = new
        logger.info("Limits updated: %s", changes)
        return CommandCompleted.ok()

    def get_max_speed(self) -> float:
        return self._limits.max_speed

    def get_profile(self) -> str:
        return self._profile.value

    def set_profile(self, profile: ProfileKind | str) -> CommandCompleted:
        """
        Select the velocity profile for subsequent moves.

        Args:
            profile: 'CONSTANT', 'TRAPEZOIDAL' or 'S_CURVE' (case-insensitive)
        """
        if isinstance(profile, ProfileKind):
            kind = profile
        else:
            try:
                kind = ProfileKind.from_string(profile)
            except ValidationError as e:
                logger.warning("%s", e)
                return CommandCompleted.failed(e)
        self._profile = kind
        logger.info("Profile set to %s", kind.value)
        return CommandCompleted.ok()

    @property
    def busy(self) -> bool:
        """True while a motion holds the actuator."""
        return self._lock.locked()

    # --------------- Planning ---------------

    def _request(self, direction: Direction | str, magnitude: float) -> MotionRequest:
        if not isinstance(direction, Direction):
            direction = Direction.from_string(direction)
        return MotionRequest(
            magnitude=_check_magnitude(magnitude),
            direction=direction,
            profile=self._profile,
            limits=self._limits,
        )

    def plan(self, direction: Direction | str, magnitude: float) -> MotionPlan:
        """
        Build the frame sequence a move would stream, without touching the actuator.

        Raises:
            ValidationError: If direction or magnitude is invalid
            DegenerateProfileError: If the current limits cannot shape this move
        """
        return build_motion_plan(self._request(direction, magnitude), self.period, self._solver)

    # --------------- Motion ---------------

    async def move(self, direction: Direction | str, magnitude: float) -> CommandCompleted:
        """
        Move along one axis by a distance (m) or angle (deg).

        Returns:
            CommandCompleted(True) once the stop frame is sent and control is
            handed back, otherwise CommandCompleted(False, reason)
        """
        try:
            _check_magnitude(magnitude)
            actuator = self._require_actuator()
            plan = build_motion_plan(
                self._request(direction, magnitude), self.period, self._solver
            )
        except SkystickError as e:
            logger.warning("Move %s %r rejected: %s", direction, magnitude, e)
            return CommandCompleted.failed(e)

        req = plan.request
        if self._lock.locked():
            logger.debug("Move %s waiting for the current motion", req.direction.name)

        async with self._lock:
            dispatcher = CommandDispatcher()
            self.last_dispatcher = dispatcher
            start = time.perf_counter()
            try:
                async with stick_session(actuator, self.ack_timeout):
                    with control_mode_guard(actuator):
                        logger.info(
                            "Move %s %.4g (%s): %d frames, %.3fs",
                            req.direction.name,
                            req.magnitude,
                            req.profile.value,
                            len(plan),
                            plan.duration,
                        )
                        await dispatcher.execute(plan, self.period, actuator.send_control_frame)
            except SkystickError as e:
                logger.warning("Move %s failed: %s", req.direction.name, e)
                return CommandCompleted.failed(e)
            except Exception as e:
                logger.exception("Move %s aborted by actuator error", req.direction.name)
                return CommandCompleted.failed(e)

        logger.info(
            "Move %s complete in %.3fs (%d frames)",
            req.direction.name,
            time.perf_counter() - start,
            dispatcher.frames_sent,
        )
        return CommandCompleted.ok()

    async def move_forward(self, distance: float) -> CommandCompleted:
        return await self.move(Direction.FORWARD, distance)

    async def move_backward(self, distance: float) -> CommandCompleted:
        return await self.move(Direction.BACKWARD, distance)

    async def move_left(self, distance: float) -> CommandCompleted:
        return await self.move(Direction.LEFT, distance)

    async def move_right(self, distance: float) -> CommandCompleted:
        return await self.move(Direction.RIGHT, distance)

    async def move_up(self, distance: float) -> CommandCompleted:
        return await self.move(Direction.UP, distance)

    async def move_down(self, distance: float) -> CommandCompleted:
        return await self.move(Direction.DOWN, distance)

    async def rotate_clockwise(self, angle: float) -> CommandCompleted:
        return await self.move(Direction.CLOCKWISE, angle)

    async def rotate_counter_clockwise(self, angle: float) -> CommandCompleted:
        return await self.move(Direction.COUNTER_CLOCKWISE, angle)

    # --------------- Flight commands ---------------

    def _require_actuator(self) -> Actuator:
        if self.actuator is None:
            raise ActuatorUnavailable()
        return self.actuator

    async def _flight_command(
        self, name: str, start: Callable[[Actuator, AckCallback], None]
    ) -> CommandCompleted:
        try:
            actuator = self._require_actuator()
        except ActuatorUnavailable as e:
            logger.warning("%s rejected: %s", name, e)
            return CommandCompleted.failed(e)
        try:
            error = await await_acknowledgement(lambda cb: start(actuator, cb), self.ack_timeout)
        except Exception as e:
            logger.exception("%s raised", name)
            return CommandCompleted.failed(e)
        if error is not None:
            logger.warning("%s failed: %s", name, error)
            return CommandCompleted.failed(error)
        logger.info("%s acknowledged", name)
        return CommandCompleted.ok()

    async def takeoff(self) -> CommandCompleted:
        return await self._flight_command("Takeoff", lambda a, cb: a.start_takeoff(cb))

    async def land(self) -> CommandCompleted:
        """Start auto-landing. Some actuators pause near the ground until confirm_landing()."""
        return await self._flight_command("Landing", lambda a, cb: a.start_landing(cb))

    async def confirm_landing(self) -> CommandCompleted:
        return await self._flight_command(
            "Landing confirmation", lambda a, cb: a.confirm_landing(cb)
        )

    # --------------- Flight controller state ---------------

    async def set_landing_protection(self, enabled: bool) -> CommandCompleted:
        """Turn the flight controller's landing protection on or off."""
        return await self._flight_command(
            f"Landing protection {'enable' if enabled else 'disable'}",
            lambda a, cb: a.set_landing_protection_enabled(enabled, cb),
        )

    async def is_landing_protection_enabled(self) -> bool | None:
        """Read the landing protection setting; None if it cannot be fetched."""
        if self.actuator is None:
            logger.warning("Landing protection query rejected: %s", ActuatorUnavailable())
            return None
        actuator = self.actuator
        try:
            value = await await_value(actuator.get_landing_protection_enabled, self.ack_timeout)
        except Exception:
            logger.exception("Landing protection query raised")
            return None
        if value is None:
            logger.warning("Unable to fetch landing protection state")
            return None
        return bool(value)

    def is_virtual_stick_enabled(self) -> bool | None:
        """Whether the actuator reports virtual-stick control; None without an actuator."""
        if self.actuator is None:
            return None
        return bool(self.actuator.is_virtual_stick_enabled())
