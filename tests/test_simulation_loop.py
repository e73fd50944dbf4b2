"""
Unit tests for SimulationLoop.
"""

import csv
import math

import pytest

from pid_academy.analyzer.scoring import ScoreCard
from pid_academy.plants import PLANTS, ControlInputs
from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.simulation_loop import (
    LoopState,
    SimulationLoop,
    SimulationSnapshot,
)
from pid_academy.utils.validators import ValidationError


TICK = 1.0 / 60.0


def run_ticks(loop, clock, n):
    results = []
    for _ in range(n):
        clock.advance(TICK)
        results.append(loop.tick())
    return results


@pytest.fixture
def loop(clock, calm):
    sim = SimulationLoop(SimulationConfig(seed=0), clock=clock)
    sim.set_difficulty(calm)
    return sim


class TestSimulationLoop:
    """Test suite for SimulationLoop."""

    def test_defaults(self, clock):
        loop = SimulationLoop(clock=clock)

        assert loop.plant.name == 'car'
        assert loop.current_value == 30.0
        assert loop.setpoint == 60.0
        assert loop.difficulty.name == 'easy'
        assert loop.gains.kp == 1.0
        assert loop.gains.ki == 0.1
        assert loop.gains.kd == 0.05
        assert loop.run_state is LoopState.RUNNING
        assert loop.controls == ControlInputs()
        assert len(loop.history) == 0
        assert loop.scores == ScoreCard()

    def test_proportional_first_tick(self, loop, clock):
        """Kp=1 alone: first output equals the error."""
        loop.set_gains(1.0, 0.0, 0.0)
        clock.advance(TICK)

        result = loop.tick()

        assert result.error == pytest.approx(30.0)
        assert result.output == pytest.approx(30.0)
        assert result.p_term == pytest.approx(30.0)
        # 30 + (30 * 0.08 - 30 * 0.025) * 0.1
        assert result.value == pytest.approx(30.165)

    def test_elapsed_time(self, loop, clock):
        results = run_ticks(loop, clock, 3)
        assert results[-1].time == pytest.approx(3 * TICK)

    def test_zero_gain_coast_down(self, loop, clock):
        """With no control and no disturbance the car only slows down."""
        loop.set_gains(0.0, 0.0, 0.0)

        values = [r.value for r in run_ticks(loop, clock, 100)]

        assert values[-1] == pytest.approx(30.0 * 0.9975 ** 100, rel=1e-6)
        assert all(v >= 0.0 for v in values)
        assert all(b < a for a, b in zip(values, values[1:]))

    def test_history_bounded(self, loop, clock):
        run_ticks(loop, clock, 150)

        samples = loop.history.get_all()

        assert len(samples) == 100
        assert samples[0].time == pytest.approx(51 * TICK)
        assert samples[-1].time == pytest.approx(150 * TICK)

    def test_history_matches_ticks(self, loop, clock):
        results = run_ticks(loop, clock, 5)
        samples = loop.history.get_all()

        for result, sample in zip(results, samples):
            assert sample.value == result.value
            assert sample.output == result.output
            assert sample.setpoint == result.setpoint

    def test_tick_result_dict(self, clock):
        loop = SimulationLoop(SimulationConfig(plant='drone', seed=0), clock=clock)
        clock.advance(TICK)

        data = loop.tick().to_dict()

        assert data['value'] == data['state']['value']
        assert 'total_power' in data['state']
        assert data['grade'] == 'F'

    def test_tick_count(self, loop, clock):
        run_ticks(loop, clock, 7)
        assert loop.tick_count == 7
        assert loop.last_result is not None


class TestPause:
    """Test suite for pause handling."""

    def test_paused_tick_is_noop(self, loop, clock):
        run_ticks(loop, clock, 3)
        value = loop.current_value
        scores = loop.scores
        integral = loop.controller.integral

        loop.pause()
        results = run_ticks(loop, clock, 10)

        assert results == [None] * 10
        assert loop.current_value == value
        assert loop.scores == scores
        assert loop.controller.integral == integral
        assert len(loop.history) == 3
        assert loop.tick_count == 3

    def test_toggle(self, loop):
        assert loop.toggle_pause() is True
        assert loop.is_paused
        assert loop.run_state is LoopState.PAUSED
        assert loop.toggle_pause() is False
        assert not loop.is_paused

    def test_resume_continues(self, loop, clock):
        loop.pause()
        assert loop.tick() is None
        loop.resume()
        clock.advance(TICK)
        assert loop.tick() is not None


class TestCommands:
    """Test suite for command methods."""

    @pytest.mark.parametrize("name", list(PLANTS))
    def test_switch_plant_restores_initial_state(self, loop, clock, name):
        loop.set_controls(gas=True, heater=80.0)
        run_ticks(loop, clock, 20)

        loop.set_active_plant(name)

        plant = PLANTS[name]
        assert loop.plant is plant
        assert loop.current_value == plant.initial_value
        assert loop.setpoint == plant.initial_setpoint
        assert len(loop.history) == 0
        assert loop.scores == ScoreCard()
        assert loop.controls == ControlInputs()
        assert loop.controller.integral == 0.0
        assert loop.last_result is None

    def test_reset_keeps_setpoint(self, loop, clock):
        loop.set_setpoint(80.0)
        run_ticks(loop, clock, 30)

        loop.reset()

        assert loop.setpoint == 80.0
        assert loop.current_value == 30.0
        assert len(loop.history) == 0
        assert loop.scores == ScoreCard()

    def test_reset_restarts_session_clock(self, loop, clock):
        run_ticks(loop, clock, 30)
        loop.reset()
        assert loop.session_start == clock.t

        clock.advance(TICK)
        assert loop.tick().time == pytest.approx(TICK)

    def test_set_setpoint_resets_integral(self, loop, clock):
        loop.set_gains(1.0, 0.5, 0.0)
        run_ticks(loop, clock, 10)
        assert loop.controller.integral > 0.0

        loop.set_setpoint(40.0)

        assert loop.controller.integral == 0.0
        assert loop.controller.previous_error == 0.0

    def test_commands_accept_explicit_time(self, loop, clock):
        """Hosts driving ticks with their own times restamp resets the same way."""
        loop.set_gains(0.0, 1.0, 0.0)
        for i in range(1, 301):
            loop.tick(now=i / 60.0)
        assert loop.last_tick_time == pytest.approx(5.0)

        loop.set_setpoint(61.0, now=loop.last_tick_time)
        assert loop.controller.last_update_time == pytest.approx(5.0)

        result = loop.tick(now=5.0 + 1.0 / 60.0)
        assert loop.controller.integral == pytest.approx(result.error / 60.0)

        loop.set_gains(1.0, 0.1, 0.05, now=6.0)
        assert loop.controller.last_update_time == 6.0

    def test_reset_with_explicit_time(self, loop):
        loop.tick(now=2.0)
        loop.reset(now=10.0)

        assert loop.session_start == 10.0
        assert loop.controller.last_update_time == 10.0
        assert loop.last_tick_time is None
        assert loop.tick(now=10.5).time == pytest.approx(0.5)

        loop.set_active_plant('drone', now=20.0)
        assert loop.session_start == 20.0

    def test_set_gains(self, loop, clock):
        run_ticks(loop, clock, 10)
        loop.set_gains(2.0, 0.3, 0.1)

        assert loop.gains.kp == 2.0
        assert loop.gains.ki == 0.3
        assert loop.gains.kd == 0.1
        assert loop.controller.integral == 0.0

    def test_difficulty_by_name(self, loop):
        loop.set_difficulty('expert')
        assert loop.difficulty.xp_multiplier == 3.0

    def test_controls_feed_manual_input(self, loop, clock):
        loop.set_controls(gas=True)
        clock.advance(TICK)
        assert loop.tick().manual_input == 60.0

        loop.set_controls(ControlInputs(gas=True, brake=True))
        clock.advance(TICK)
        assert loop.tick().manual_input == 20.0

    @pytest.mark.parametrize("command,args", [
        ('set_gains', (math.nan, 0.1, 0.0)),
        ('set_gains', (1.0, math.inf, 0.0)),
        ('set_setpoint', (math.nan,)),
        ('set_setpoint', (-math.inf,)),
        ('set_active_plant', ('boat',)),
        ('set_difficulty', ('nightmare',)),
        ('set_controls', ('gas',)),
    ])
    def test_invalid_commands(self, loop, command, args):
        with pytest.raises(ValidationError):
            getattr(loop, command)(*args)

    def test_invalid_control_value(self, loop):
        with pytest.raises(ValidationError):
            loop.set_controls(throttle=150.0)
        assert loop.controls == ControlInputs()

    def test_unknown_plant_in_config(self):
        with pytest.raises(ValidationError):
            SimulationConfig(plant='submarine')


class TestSnapshot:
    """Test suite for snapshots."""

    def test_snapshot_fields(self, loop, clock):
        loop.set_gains(1.5, 0.2, 0.05)
        run_ticks(loop, clock, 10)

        snap = loop.snapshot()

        assert snap.kp == 1.5
        assert snap.ki == 0.2
        assert snap.kd == 0.05
        assert snap.setpoint == 60.0
        assert snap.plant == 'car'
        assert snap.difficulty == 'calm'
        assert snap.timestamp
        assert set(snap.performance) == {'stability', 'speed', 'accuracy', 'grade'}

    def test_json_round_trip(self, loop, clock):
        run_ticks(loop, clock, 5)
        snap = loop.snapshot()

        restored = SimulationSnapshot.from_json(snap.to_json())

        assert restored == snap

    def test_system_alias(self):
        snap = SimulationSnapshot.from_dict({
            'kp': 1.0, 'ki': 0.0, 'kd': 0.0,
            'setpoint': 40.0, 'difficulty': 'easy', 'system': 'drone',
        })
        assert snap.plant == 'drone'

    def test_apply_snapshot(self, clock):
        snap = SimulationSnapshot(
            kp=2.0, ki=0.2, kd=0.1, setpoint=70.0,
            difficulty='hard', plant='drone'
        )
        loop = SimulationLoop(clock=clock)

        loop.apply_snapshot(snap)

        assert loop.plant.name == 'drone'
        assert loop.difficulty.name == 'hard'
        assert loop.gains.kp == 2.0
        assert loop.setpoint == 70.0
        assert loop.current_value == 50.0


class TestTickLog:
    """Test suite for the per-tick CSV log."""

    def test_rows_written(self, tmp_path, clock):
        path = tmp_path / 'run.csv'
        loop = SimulationLoop(SimulationConfig(csv_log_path=str(path), seed=1), clock=clock)

        with loop:
            run_ticks(loop, clock, 5)

        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 5
        assert [int(r['tick']) for r in rows] == [0, 1, 2, 3, 4]
        assert all(r['plant'] == 'car' for r in rows)
        assert all(r['difficulty'] == 'easy' for r in rows)
        assert float(rows[0]['setpoint']) == 60.0
        assert rows[-1]['grade'] in 'ABCDF'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
