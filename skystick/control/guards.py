"""
Scoped acquisition of actuator control around a motion.

Usage (release runs in reverse order of acquisition):

    async with stick_session(actuator):
        with control_mode_guard(actuator):
            await dispatcher.execute(plan, period, actuator.send_control_frame)
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Iterator

from skystick.control.actuator import Actuator, await_acknowledgement
from skystick.protocol.types import VELOCITY_CONTROL_MODES, ControlModeSnapshot
from skystick.utils.errors import ControlTransitionError

logger = logging.getLogger(__name__)


async def set_virtual_sticks(
    actuator: Actuator, enable: bool, ack_timeout: float | None = None
) -> None:
    """Enable or disable virtual-stick control and wait for the acknowledgement."""
    error = await await_acknowledgement(
        lambda cb: actuator.set_velocity_control_enabled(enable, cb), ack_timeout
    )
    if error is not None:
        logger.warning("Virtual sticks %s failed: %s", "enable" if enable else "disable", error)
        raise ControlTransitionError(enable, error)
    logger.info("Virtual sticks %s", "enabled" if enable else "disabled")


@contextlib.asynccontextmanager
async def stick_session(
    actuator: Actuator, ack_timeout: float | None = None
) -> AsyncIterator[None]:
    """
    Hold virtual-stick control for the duration of the block.

    If enabling fails nothing is held and the block never runs. Disabling
    always runs on exit; a refused disable raises ControlTransitionError.
    When the block itself failed, that error is kept as the disable error's
    `after` and named in its message.
    """
    await set_virtual_sticks(actuator, True, ack_timeout)
    try:
        yield
    except BaseException as exc:
        try:
            await set_virtual_sticks(actuator, False, ack_timeout)
        except ControlTransitionError as e:
            raise ControlTransitionError(False, e.reason, after=exc) from exc
        raise
    await set_virtual_sticks(actuator, False, ack_timeout)


@contextlib.contextmanager
def control_mode_guard(
    actuator: Actuator, modes: ControlModeSnapshot = VELOCITY_CONTROL_MODES
) -> Iterator[ControlModeSnapshot]:
    """
    Install velocity-control modes, restoring the previous modes on exit.

    Yields the snapshot taken before installation.
    """
    snapshot = actuator.get_control_modes()
    logger.debug("Control modes saved: %s", snapshot)
    try:
        actuator.set_control_modes(modes)
        yield snapshot
    finally:
        actuator.set_control_modes(snapshot)
        logger.debug("Control modes restored: %s", snapshot)
