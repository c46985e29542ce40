"""
Actuator interface consumed by the motion controller.

Actuator SDKs acknowledge state changes through callbacks that may fire on
their own threads. await_acknowledgement() and await_value() turn one such
callback into a single await on the running event loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from skystick.protocol.types import ControlFrame, ControlModeSnapshot

logger = logging.getLogger(__name__)

# Receives None on success or an error description
AckCallback = Callable[[str | None], None]
# Receives the requested value, or None if the actuator could not read it
ValueCallback = Callable[[Any], None]


class Actuator(Protocol):
    """Narrow view of a virtual-stick capable flight controller."""

    def send_control_frame(self, frame: ControlFrame) -> None:
        """Send one velocity command; no acknowledgement."""
        ...

    def set_velocity_control_enabled(self, enabled: bool, callback: AckCallback) -> None: ...

    def is_virtual_stick_enabled(self) -> bool: ...

    def get_control_modes(self) -> ControlModeSnapshot: ...

    def set_control_modes(self, modes: ControlModeSnapshot) -> None: ...

    def start_takeoff(self, callback: AckCallback) -> None: ...

    def start_landing(self, callback: AckCallback) -> None: ...

    def confirm_landing(self, callback: AckCallback) -> None: ...

    def set_landing_protection_enabled(self, enabled: bool, callback: AckCallback) -> None: ...

    def get_landing_protection_enabled(self, callback: ValueCallback) -> None: ...


async def _await_callback(start: Callable[[Callable[[Any], None]], None], timeout: float | None):
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[Any] = loop.create_future()

    def _resolve(value: Any) -> None:
        if not fut.done():
            fut.set_result(value)

    def _callback(value: Any) -> None:
        # SDK callbacks can arrive on any thread, or inline from start()
        try:
            loop.call_soon_threadsafe(_resolve, value)
        except RuntimeError:
            logger.warning("Callback arrived after the event loop closed: %r", value)

    start(_callback)

    if timeout is None:
        return await fut
    return await asyncio.wait_for(fut, timeout=timeout)


async def await_acknowledgement(
    start: Callable[[AckCallback], None],
    timeout: float | None = None,
) -> str | None:
    """
    Start a callback-style actuator call and wait for its acknowledgement.

    Args:
        start: Issues the actuator call, passing along the given callback
        timeout: Optional bound on the wait in seconds

    Returns:
        None on success, otherwise the reported error description. A timeout
        is reported as an error description.
    """
    try:
        return await _await_callback(start, timeout)
    except TimeoutError:
        return f"No acknowledgement within {timeout:.1f}s"


async def await_value(
    start: Callable[[ValueCallback], None],
    timeout: float | None = None,
) -> Any:
    """Start a callback-style actuator read; None if it failed or timed out."""
    try:
        return await _await_callback(start, timeout)
    except TimeoutError:
        logger.warning("No value within %.1fs", timeout)
        return None
