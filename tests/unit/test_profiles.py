"""
Tests for closed-form velocity profiles:
1. Phase durations match the closed-form solutions
2. Profiles are continuous and end at rest
3. Degenerate limit/magnitude combinations are rejected, not sampled
"""

import math

import numpy as np
import pytest

from skystick.motion.profiles import ProfileKind, ProfileSolver, solve_profile
from skystick.motion.sampler import sample_velocity
from skystick.protocol.types import AxisClass
from skystick.protocol.wire import KinematicLimits
from skystick.utils.errors import DegenerateProfileError, ValidationError

pytestmark = pytest.mark.unit

DEFAULTS = KinematicLimits(
    max_speed=1.0,
    max_angular_speed=30.0,
    max_acceleration=0.8,
    max_angular_acceleration=15.0,
    max_jerk=1.0,
    max_angular_jerk=30.0,
)


def _integrate(profile, dt=1e-4):
    samples = sample_velocity(profile.velocity, profile.duration, dt)
    return float(np.sum(samples) * dt)


class TestProfileKind:
    def test_from_string_is_case_insensitive(self):
        assert ProfileKind.from_string("s_curve") is ProfileKind.S_CURVE
        assert ProfileKind.from_string(" Trapezoidal ") is ProfileKind.TRAPEZOIDAL
        assert ProfileKind.from_string("s-curve") is ProfileKind.S_CURVE

    def test_unknown_name_lists_valid_profiles(self):
        with pytest.raises(ValidationError) as exc:
            ProfileKind.from_string("LINEAR")
        assert "'CONSTANT', 'TRAPEZOIDAL', 'S_CURVE'" in str(exc.value)

    def test_non_string_is_rejected(self):
        with pytest.raises(ValidationError, match="Profile must be a string"):
            ProfileKind.from_string(3)


class TestConstant:
    def test_duration_is_magnitude_over_speed(self):
        profile = solve_profile(2.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.CONSTANT)
        assert profile.phase_durations == pytest.approx((2.0,))
        assert profile.peak_velocity == 1.0
        assert profile.velocity(0.0) == 1.0
        assert profile.velocity(1.999) == 1.0

    def test_angular_uses_angular_speed(self):
        profile = solve_profile(90.0, AxisClass.ANGULAR, DEFAULTS, ProfileKind.CONSTANT)
        assert profile.duration == pytest.approx(3.0)
        assert profile.peak_velocity == 30.0


class TestTrapezoidal:
    def test_phase_durations(self):
        """Magnitude 2 at 1 m/s and 0.8 m/s^2: 1.25 + 0.75 + 1.25 seconds."""
        profile = solve_profile(2.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.TRAPEZOIDAL)
        t1, t2, t3 = profile.phase_durations
        assert t1 == pytest.approx(1.25)
        assert t2 == pytest.approx(0.75)
        assert t3 == pytest.approx(1.25)
        assert profile.duration == pytest.approx(3.25)
        np.testing.assert_allclose(profile.phase_boundaries, [1.25, 2.0, 3.25])

    def test_velocity_shape(self):
        profile = solve_profile(2.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.TRAPEZOIDAL)
        assert profile.velocity(0.0) == 0.0
        assert profile.velocity(0.625) == pytest.approx(0.5)
        assert profile.velocity(1.5) == pytest.approx(1.0)
        assert profile.velocity(3.25) == pytest.approx(0.0, abs=1e-12)

    def test_short_move_caps_cruise_speed(self):
        profile = solve_profile(0.5, AxisClass.LINEAR, DEFAULTS, ProfileKind.TRAPEZOIDAL)
        assert profile.peak_velocity == pytest.approx(0.25)

    def test_area_matches_magnitude(self):
        profile = solve_profile(2.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.TRAPEZOIDAL)
        assert _integrate(profile) == pytest.approx(2.0, abs=1e-3)

    @pytest.mark.parametrize("magnitude", [0.1, 0.5, 1.0, 1.6, 2.0, 3.0, 10.0])
    def test_continuous_at_phase_boundaries(self, magnitude):
        profile = solve_profile(magnitude, AxisClass.LINEAR, DEFAULTS, ProfileKind.TRAPEZOIDAL)
        # Below 2 m the cruise speed is capped at half the magnitude
        assert profile.peak_velocity == pytest.approx(min(1.0, magnitude / 2.0))
        eps = 1e-9
        for b in profile.phase_boundaries:
            assert profile.velocity(b - eps) == pytest.approx(profile.velocity(b + eps), abs=1e-6)

    def test_negative_cruise_is_degenerate(self):
        limits = KinematicLimits(max_speed=10.0, max_acceleration=0.8)
        with pytest.raises(DegenerateProfileError) as exc:
            solve_profile(10.0, AxisClass.LINEAR, limits, ProfileKind.TRAPEZOIDAL)
        assert exc.value.phase == 2


class TestSCurve:
    def test_phase_durations(self):
        profile = solve_profile(10.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.S_CURVE)
        d = profile.phase_durations
        assert len(d) == 7
        # a_max = min(0.75 * 1.0, 0.8) = 0.75; jerk phases last a/j
        for i in (0, 2, 4, 6):
            assert d[i] == pytest.approx(0.75)
        assert d[1] == pytest.approx((1.0 - 0.5625) / 0.75)
        assert d[3] == pytest.approx((0.75 * 10.0 - 0.5625 - 1.0) / 0.75)
        assert d[5] == pytest.approx(d[1])

    def test_continuous_at_phase_boundaries(self):
        profile = solve_profile(10.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.S_CURVE)
        eps = 1e-9
        for b in profile.phase_boundaries[:-1]:
            assert profile.velocity(b - eps) == pytest.approx(profile.velocity(b + eps), abs=1e-6)

    def test_reaches_peak_and_ends_at_rest(self):
        profile = solve_profile(10.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.S_CURVE)
        mid = profile.phase_boundaries[2] + profile.phase_durations[3] / 2.0
        assert profile.velocity(mid) == pytest.approx(1.0)
        assert profile.velocity(profile.duration) == pytest.approx(0.0, abs=1e-9)

    def test_area_matches_magnitude(self):
        profile = solve_profile(90.0, AxisClass.ANGULAR, DEFAULTS, ProfileKind.S_CURVE)
        assert _integrate(profile) == pytest.approx(90.0, rel=1e-3)

    def test_short_move_is_degenerate(self):
        """Default limits cannot shape a 2 m S-curve: the cruise phase goes negative."""
        with pytest.raises(DegenerateProfileError) as exc:
            solve_profile(2.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.S_CURVE)
        assert exc.value.phase == 4
        assert "S_CURVE" in str(exc.value)


class TestSolver:
    @pytest.mark.parametrize("magnitude", [0.0, -1.0, math.nan, math.inf])
    def test_rejects_invalid_magnitude(self, magnitude):
        with pytest.raises(ValidationError):
            solve_profile(magnitude, AxisClass.LINEAR, DEFAULTS, ProfileKind.CONSTANT)

    def test_velocity_is_zero_outside_motion(self):
        profile = solve_profile(1.0, AxisClass.LINEAR, DEFAULTS, ProfileKind.CONSTANT)
        assert profile(-0.1) == 0.0
        assert profile(profile.duration + 0.1) == 0.0

    def test_zero_cruise_phase_is_accepted(self):
        """Exact-fit trapezoid: the cruise phase is zero, not rejected."""
        limits = KinematicLimits(max_speed=1.0, max_acceleration=0.5)
        profile = ProfileSolver(tolerance=1e-9).solve(
            2.0, AxisClass.LINEAR, limits, ProfileKind.TRAPEZOIDAL
        )
        assert profile.phase_durations[1] == pytest.approx(0.0, abs=1e-12)
        assert min(profile.phase_durations) >= 0.0
