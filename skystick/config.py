"""
Central configuration for skystick tunables and shared constants.
"""

from __future__ import annotations

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("SKYSTICK_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


def _env_float_optional(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return None


# Virtual-stick command cadence (40 ms = 25 Hz)
COMMAND_INTERVAL_MS: float = _env_float("SKYSTICK_COMMAND_INTERVAL_MS", 40.0)
COMMAND_INTERVAL_S: float = max(1e-6, COMMAND_INTERVAL_MS / 1000.0)

# Default kinematic limits (linear in m, angular in deg)
DEFAULT_MAX_SPEED: float = _env_float("SKYSTICK_MAX_SPEED", 1.0)  # m/s
DEFAULT_MAX_ANGULAR_SPEED: float = _env_float("SKYSTICK_MAX_ANGULAR_SPEED", 30.0)  # deg/s
DEFAULT_MAX_ACCELERATION: float = _env_float("SKYSTICK_MAX_ACCELERATION", 0.8)  # m/s^2
DEFAULT_MAX_ANGULAR_ACCELERATION: float = _env_float(
    "SKYSTICK_MAX_ANGULAR_ACCELERATION", 15.0
)  # deg/s^2
DEFAULT_MAX_JERK: float = _env_float("SKYSTICK_MAX_JERK", 1.0)  # m/s^3
DEFAULT_MAX_ANGULAR_JERK: float = _env_float("SKYSTICK_MAX_ANGULAR_JERK", 30.0)  # deg/s^3

# Velocity profile selected at startup
DEFAULT_PROFILE: str = os.getenv("SKYSTICK_PROFILE", "TRAPEZOIDAL").strip().upper()

# Upper bound on waiting for an actuator acknowledgement; None waits indefinitely
ACK_TIMEOUT_S: float | None = _env_float_optional("SKYSTICK_ACK_TIMEOUT_S")

# S-curve acceleration cap relative to cruise speed
SCURVE_ACCEL_RATIO: float = 0.75

# Negative phase durations down to this size are treated as rounding noise
PHASE_TOLERANCE_S: float = 1e-9

LOG_LEVEL_DEFAULT: str = "INFO"
