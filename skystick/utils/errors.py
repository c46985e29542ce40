"""Error taxonomy shared by the motion pipeline and the controller."""


class SkystickError(Exception):
    """Base class for errors reported back to motion callers."""


class ValidationError(SkystickError, ValueError):
    """Rejected input: non-positive magnitude, unknown profile, bad limit."""


class ActuatorUnavailable(SkystickError):
    """No actuator is attached."""

    def __init__(self, message: str = "Drone not available") -> None:
        super().__init__(message)


class ControlTransitionError(SkystickError):
    """The actuator refused to enable or disable virtual-stick control."""

    def __init__(
        self, enable: bool, reason: str | None = None, after: BaseException | None = None
    ) -> None:
        self.enable = enable
        self.reason = reason
        # Failure that ended the motion before the transition was attempted
        self.after = after
        action = "enable" if enable else "disable"
        message = f"Cannot {action} virtual sticks"
        if reason:
            message += f": {reason}"
        if after is not None:
            message += f" (after: {after})"
        super().__init__(message)


class DegenerateProfileError(SkystickError):
    """A solved profile has a negative phase duration."""

    def __init__(self, message: str, phase: int | None = None) -> None:
        super().__init__(message)
        self.phase = phase
