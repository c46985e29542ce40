"""
Fixed-cadence streaming of control frames.

The first frame is sent immediately; frame k is sent at t0 + k * period on
the event loop clock, so the time spent inside the sink does not stretch the
cadence. There is no suspension after the terminal stop frame.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from skystick.config import TRACE
from skystick.protocol.types import ControlFrame

logger = logging.getLogger(__name__)

FrameSink = Callable[[ControlFrame], None]


class CommandDispatcher:
    """Streams a frame sequence to a fire-and-forget sink at a fixed period."""

    __slots__ = ("frames_sent", "overrun_count", "max_lateness_s")

    def __init__(self) -> None:
        self.frames_sent = 0
        self.overrun_count = 0
        self.max_lateness_s = 0.0

    async def execute(
        self,
        plan: Iterable[ControlFrame],
        period: float,
        sink: FrameSink,
    ) -> int:
        """
        Send every frame in order, one period apart.

        Args:
            plan: Frames to send; a MotionPlan or any iterable of ControlFrame
            period: Seconds between consecutive sends
            sink: Called once per frame; must not block

        Returns:
            Number of frames sent

        Exceptions raised by sink propagate and end the stream.
        """
        loop = asyncio.get_running_loop()
        self.frames_sent = 0
        self.overrun_count = 0
        self.max_lateness_s = 0.0

        t0 = loop.time()
        for k, frame in enumerate(plan):
            if k > 0:
                deadline = t0 + k * period
                delay = deadline - loop.time()
                if delay > 0.0:
                    await asyncio.sleep(delay)
                else:
                    # Behind schedule: still yield so other tasks keep running
                    self.overrun_count += 1
                    self.max_lateness_s = max(self.max_lateness_s, -delay)
                    await asyncio.sleep(0)

            sink(frame)
            self.frames_sent += 1
            if logger.isEnabledFor(TRACE):
                logger.log(TRACE, "frame %d: %s", k, frame.as_tuple())

        elapsed = loop.time() - t0
        logger.debug(
            "Dispatched %d frames in %.3fs (period %.3fs, %d late, max lateness %.1fms)",
            self.frames_sent,
            elapsed,
            period,
            self.overrun_count,
            self.max_lateness_s * 1000.0,
        )
        return self.frames_sent
