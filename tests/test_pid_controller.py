"""
Unit tests for PID Controller.
"""

import math

import pytest
import numpy as np

from pid_academy.core.pid_controller import PIDController, PIDResult, INTEGRAL_LIMIT
from pid_academy.core.pid_params import PIDGains
from pid_academy.core.gain_advice import AdviceLevel, assess_gain
from pid_academy.utils.validators import ValidationError


class TestPIDController:
    """Test suite for PIDController class."""

    def test_initialization_default(self, clock):
        """Test default gains."""
        pid = PIDController(clock=clock)
        assert pid.kp == 1.0
        assert pid.ki == 0.1
        assert pid.kd == 0.05
        assert pid.integral == 0.0
        assert pid.last_update_time == 0.0

    def test_proportional_only(self, clock):
        """P-only output is independent of elapsed time."""
        pid = PIDController(kp=1.0, ki=0.0, kd=0.0, clock=clock)

        result = pid.update(setpoint=60.0, current_value=30.0)

        assert result.p_term == pytest.approx(30.0)
        assert result.output == pytest.approx(30.0)
        assert result.error == pytest.approx(30.0)

    def test_proportional_only_after_delay(self, clock):
        """Same result when the first update comes late."""
        pid = PIDController(kp=1.0, ki=0.0, kd=0.0, clock=clock)
        clock.advance(2.5)

        result = pid.update(setpoint=60.0, current_value=30.0)

        assert result.output == pytest.approx(30.0)

    def test_integral_accumulates_real_time(self, clock):
        """Integral grows by error times elapsed seconds."""
        pid = PIDController(kp=0.0, ki=0.5, kd=0.0, clock=clock)

        pid.update(10.0, 0.0, now=1.0)
        assert pid.integral == pytest.approx(10.0)

        result = pid.update(10.0, 0.0, now=1.5)
        assert pid.integral == pytest.approx(15.0)
        assert result.i_term == pytest.approx(7.5)

    def test_integral_clamped_positive(self, clock):
        """Sustained positive error saturates the integral at +50."""
        pid = PIDController(kp=0.0, ki=1.0, kd=0.0, clock=clock)

        for i in range(1, 101):
            result = pid.update(100.0, 0.0, now=float(i))

        assert pid.integral == INTEGRAL_LIMIT
        assert result.i_term == pytest.approx(50.0)

    def test_integral_clamped_negative(self, clock):
        """Sustained negative error saturates the integral at -50."""
        pid = PIDController(kp=0.0, ki=2.0, kd=0.0, clock=clock)

        for i in range(1, 101):
            pid.update(0.0, 100.0, now=float(i))

        assert pid.integral == -INTEGRAL_LIMIT
        assert pid.state.i_term == pytest.approx(-100.0)

    def test_integral_always_within_band(self, clock):
        """Integral stays in [-50, 50] for arbitrary update sequences."""
        rng = np.random.default_rng(7)
        pid = PIDController(kp=1.0, ki=0.3, kd=0.1, clock=clock)
        now = 0.0

        for _ in range(2000):
            now += float(rng.uniform(0.0, 2.0))
            setpoint = float(rng.uniform(-500, 500))
            value = float(rng.uniform(-500, 500))
            pid.update(setpoint, value, now=now)
            assert -INTEGRAL_LIMIT <= pid.integral <= INTEGRAL_LIMIT

    def test_derivative(self, clock):
        """Derivative is the error slope between updates."""
        pid = PIDController(kp=0.0, ki=0.0, kd=1.0, clock=clock)

        first = pid.update(10.0, 0.0, now=1.0)
        assert first.d_term == pytest.approx(10.0)

        second = pid.update(10.0, 5.0, now=1.5)
        assert second.d_term == pytest.approx(-10.0)

    def test_zero_delta_time(self, clock):
        """Back-to-back updates with no elapsed time give no derivative."""
        pid = PIDController(kp=1.0, ki=1.0, kd=1.0, clock=clock)

        result = pid.update(10.0, 0.0, now=0.0)

        assert result.d_term == 0.0
        assert result.i_term == 0.0
        assert result.output == pytest.approx(10.0)
        assert math.isfinite(result.output)

    def test_negative_delta_time(self, clock):
        """A clock stepping backwards neither differentiates nor unwinds."""
        pid = PIDController(kp=0.0, ki=1.0, kd=1.0, clock=clock)
        pid.update(10.0, 0.0, now=2.0)
        integral = pid.integral

        result = pid.update(-10.0, 0.0, now=1.0)

        assert result.d_term == 0.0
        assert pid.integral == integral
        assert pid.last_update_time == 1.0

    def test_state_tracks_last_update(self, clock):
        """previous_error and last_update_time follow the latest call."""
        pid = PIDController(clock=clock)

        pid.update(50.0, 20.0, now=0.25)

        assert pid.previous_error == pytest.approx(30.0)
        assert pid.last_update_time == 0.25
        assert isinstance(pid.state, PIDResult)

    def test_reset(self, clock):
        """Reset zeroes accumulated state and restamps time."""
        pid = PIDController(kp=1.0, ki=1.0, kd=0.5, clock=clock)
        for i in range(1, 11):
            pid.update(100.0, 0.0, now=float(i))
        assert pid.integral > 0

        clock.t = 42.0
        pid.reset()

        assert pid.integral == 0.0
        assert pid.previous_error == 0.0
        assert pid.last_update_time == 42.0

    def test_update_at_setpoint_after_reset(self, clock):
        """Right after reset, zero error produces zero terms."""
        pid = PIDController(kp=2.0, ki=1.0, kd=0.5, clock=clock)
        for i in range(1, 6):
            pid.update(80.0, 10.0, now=float(i))
        clock.t = 5.0
        pid.reset()

        for now in (5.0, 5.016):
            result = pid.update(25.0, 25.0, now=now)
            assert result.p_term == pytest.approx(0.0, abs=1e-12)
            assert result.i_term == pytest.approx(0.0, abs=1e-12)
            assert result.d_term == pytest.approx(0.0, abs=1e-12)

    def test_set_parameters_keeps_state(self, clock):
        """Changing gains does not touch the integral."""
        pid = PIDController(kp=1.0, ki=1.0, kd=0.0, clock=clock)
        pid.update(10.0, 0.0, now=1.0)

        pid.set_parameters(2.0, 0.5, 0.1)

        assert pid.gains == PIDGains(2.0, 0.5, 0.1)
        assert pid.integral == pytest.approx(10.0)

    def test_set_parameters_rejects_nan(self, clock):
        """Non-finite gains are rejected and the old gains kept."""
        pid = PIDController(clock=clock)

        with pytest.raises(ValidationError):
            pid.set_parameters(float('nan'), 0.1, 0.05)
        with pytest.raises(ValueError):
            pid.set_parameters(1.0, float('inf'), 0.05)

        assert pid.gains == PIDGains()

    def test_default_clock(self):
        """Without an injected clock the controller uses real time."""
        pid = PIDController(kp=1.0, ki=0.0, kd=0.0)
        result = pid.update(1.0, 0.0)
        assert result.output == pytest.approx(1.0)


class TestPIDGains:
    """Test suite for PIDGains class."""

    def test_default_values(self):
        gains = PIDGains()
        assert (gains.kp, gains.ki, gains.kd) == (1.0, 0.1, 0.05)

    def test_negative_gains_allowed(self):
        """Gains are unconstrained in sign."""
        gains = PIDGains(kp=-1.0)
        assert gains.kp == -1.0

    def test_validation_non_finite(self):
        with pytest.raises(ValidationError):
            PIDGains(kd=float('inf'))

    def test_validation_non_numeric(self):
        with pytest.raises(ValidationError):
            PIDGains(kp="fast")

    def test_copy(self):
        gains1 = PIDGains(kp=1.0, ki=0.5)
        gains2 = gains1.copy(kp=2.0)

        assert gains1.kp == 1.0
        assert gains2.kp == 2.0
        assert gains2.ki == 0.5

    def test_from_dict_ignores_extra_keys(self):
        gains = PIDGains.from_dict({'kp': 3.0, 'ki': 1.0, 'kd': 0.5, 'setpoint': 60})
        assert gains == PIDGains(3.0, 1.0, 0.5)

    def test_json_serialization(self):
        gains1 = PIDGains(kp=2.0, ki=0.5, kd=0.1)
        gains2 = PIDGains.from_json(gains1.to_json())
        assert gains1 == gains2


class TestGainAdvice:
    """Test suite for gain rule-of-thumb feedback."""

    @pytest.mark.parametrize("name,value,level", [
        ('kp', 0.2, AdviceLevel.WARNING),
        ('kp', 1.0, AdviceLevel.GOOD),
        ('kp', 3.5, AdviceLevel.WARNING),
        ('ki', 0.005, AdviceLevel.WARNING),
        ('ki', 0.1, AdviceLevel.GOOD),
        ('ki', 1.5, AdviceLevel.BAD),
        ('kd', 0.0, AdviceLevel.WARNING),
        ('kd', 0.05, AdviceLevel.GOOD),
        ('kd', 0.8, AdviceLevel.WARNING),
    ])
    def test_levels(self, name, value, level):
        assert assess_gain(name, value).level is level

    def test_boundaries_are_good(self):
        """Edge values of each band count as good."""
        assert assess_gain('kp', 0.5).level is AdviceLevel.GOOD
        assert assess_gain('kp', 3.0).level is AdviceLevel.GOOD
        assert assess_gain('ki', 1.0).level is AdviceLevel.GOOD
        assert assess_gain('kd', 0.5).level is AdviceLevel.GOOD

    def test_message(self):
        assert "windup" in assess_gain('ki', 2.0).message

    def test_unknown_gain(self):
        with pytest.raises(ValueError):
            assess_gain('kf', 1.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
