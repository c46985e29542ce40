"""Command-line interface for simulating one virtual-stick move."""

import argparse
import asyncio
import logging
import sys

import skystick.config as cfg
from skystick.config import TRACE
from skystick.control.controller import MotionController
from skystick.control.simulated import SimulatedActuator
from skystick.motion.profiles import ProfileKind
from skystick.protocol.types import Direction
from skystick.protocol.wire import CommandCompleted, KinematicLimits, encode_json
from skystick.utils.errors import SkystickError

logger = logging.getLogger("skystick.cli")

_LIMIT_FLAGS = (
    ("max_speed", "m/s"),
    ("max_angular_speed", "deg/s"),
    ("max_acceleration", "m/s^2"),
    ("max_angular_acceleration", "deg/s^2"),
    ("max_jerk", "m/s^3"),
    ("max_angular_jerk", "deg/s^3"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skystick-sim", description="Run one virtual-stick move against a simulated drone"
    )
    parser.add_argument(
        "--direction",
        required=True,
        choices=[d.value for d in Direction],
        help="Move direction",
    )
    parser.add_argument(
        "--magnitude", type=float, required=True, help="Distance in m, or angle in deg"
    )
    parser.add_argument(
        "--profile",
        default=cfg.DEFAULT_PROFILE,
        help="Velocity profile: CONSTANT, TRAPEZOIDAL or S_CURVE",
    )
    for name, unit in _LIMIT_FLAGS:
        parser.add_argument(
            f"--{name.replace('_', '-')}", dest=name, type=float, help=f"Limit in {unit}"
        )
    parser.add_argument(
        "--interval-ms",
        type=float,
        default=cfg.COMMAND_INTERVAL_MS,
        help="Command period in milliseconds",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the plan without dispatching it"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )

    # Verbose logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Enable quiet logging (WARNING level)",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )
    return parser


def _resolve_log_level(args: argparse.Namespace) -> int:
    # Precedence: --log-level, then -v/-q, then SKYSTICK_TRACE, then default
    if args.log_level:
        if args.log_level == "TRACE":
            cfg.TRACE_ENABLED = True
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        cfg.TRACE_ENABLED = True
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    if cfg.TRACE_ENABLED:
        return TRACE
    return getattr(logging, cfg.LOG_LEVEL_DEFAULT)


def _print_plan(controller: MotionController, direction: str, magnitude: float) -> None:
    plan = controller.plan(direction, magnitude)
    print(
        f"{plan.request.direction.name} {magnitude:g} using {plan.request.profile.value}: "
        f"{len(plan)} frames, {plan.duration:.3f}s, "
        f"peak {plan.profile.peak_velocity:g} on {plan.binding.channel.value}"
    )
    print("phases: " + ", ".join(f"{d:.4f}" for d in plan.profile.phase_durations))
    for k, frame in enumerate(plan):
        print(f"{k * plan.period:8.3f}  " + "  ".join(f"{v:+.4f}" for v in frame.as_tuple()))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for skystick-sim."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=_resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    limit_overrides = {
        name: getattr(args, name) for name, _ in _LIMIT_FLAGS if getattr(args, name) is not None
    }

    actuator = SimulatedActuator()
    try:
        controller = MotionController(
            actuator,
            limits=KinematicLimits(**limit_overrides),
            profile=ProfileKind.from_string(args.profile),
            period=args.interval_ms / 1000.0,
        )
        if args.dry_run:
            _print_plan(controller, args.direction, args.magnitude)
            return 0
    except SkystickError as e:
        logger.error("%s", e)
        if args.json:
            print(encode_json(CommandCompleted.failed(e)).decode())
        return 1

    result = asyncio.run(controller.move(args.direction, args.magnitude))

    if args.json:
        print(encode_json(result).decode())
    elif result.completed:
        print(f"Completed: {len(actuator.frames)} frames sent")
    else:
        print(f"Failed: {result.error_description}", file=sys.stderr)
    return 0 if result.completed else 1


if __name__ == "__main__":
    raise SystemExit(main())
