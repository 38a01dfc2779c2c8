"""Unit tests for the stateful Simulator driver.

Tests history recording, fixed-step timekeeping and data export.
"""

import numpy as np
import polars as pl
import pytest
from numpy.testing import assert_allclose

from launchsim.dynamics import AutopilotMode
from launchsim.environment import R_PLANET
from launchsim.simulation import SimulationResult, Simulator, StepAccumulator

DT = 1.0 / 60.0

# =============================================================================
# Simulator Initialization Tests
# =============================================================================


class TestSimulatorInit:
    """Test simulator initialization."""

    def test_from_launch_pad_default(self):
        sim = Simulator.from_launch_pad()
        state = sim.get_state()

        assert_allclose(state.position, [0.0, R_PLANET])
        assert state.is_paused
        assert sim.time == 0.0
        assert sim.altitude == 0.0
        assert sim.last_telemetry is None
        assert len(sim.get_history()) == 1

    def test_get_state_returns_copy(self):
        sim = Simulator.from_launch_pad()
        state = sim.get_state()
        state.position[1] = 0.0

        assert sim.state.position[1] == R_PLANET


# =============================================================================
# Stepping Tests
# =============================================================================


class TestStepping:
    """Test step, run and run_until."""

    def test_paused_run_does_not_advance(self):
        """Run on a paused sim records ticks without moving the clock."""
        sim = Simulator.from_launch_pad()
        sim.run(1.0)

        assert sim.time == 0.0
        assert len(sim.get_telemetry()) == 60

    def test_throttle_resumes_and_climbs(self):
        sim = Simulator.from_launch_pad()
        sim.set_throttle(1.0)
        telemetry = sim.run(2.0)

        assert_allclose(sim.time, 2.0, rtol=1e-9)
        assert telemetry.altitude_m > 0
        assert telemetry is sim.last_telemetry

    def test_run_until(self):
        sim = Simulator.from_launch_pad()
        sim.set_throttle(1.0)
        telemetry = sim.run_until(lambda t: t.altitude_m > 1000.0, max_time=60.0)

        assert telemetry is not None
        assert telemetry.altitude_m > 1000.0
        assert sim.get_telemetry()[-2].altitude_m <= 1000.0

    def test_run_until_budget(self):
        """A condition that never holds stops at the tick budget."""
        sim = Simulator.from_launch_pad()
        telemetry = sim.run_until(lambda t: False, max_time=0.5)

        assert telemetry is None
        assert len(sim.get_telemetry()) == 30

    def test_controls_delegate(self):
        sim = Simulator.from_launch_pad()
        sim.toggle_pause()
        assert not sim.state.is_paused

        sim.set_autopilot(AutopilotMode.PROGRADE)
        sim.nudge_pitch()
        assert sim.state.rotation == 2.0
        assert sim.state.autopilot_mode is AutopilotMode.OFF

        sim.set_pitch(-5.0)
        assert sim.state.rotation == -5.0

        sim.stage()
        assert sim.state.current_stage_index == 1
        assert sim.state.throttle == 1.0

    def test_burn_to_staging(self):
        """Booster burns out in about half a minute, then the upper stage lights."""
        sim = Simulator.from_launch_pad()
        sim.set_throttle(1.0)
        sim.set_autopilot(AutopilotMode.GRAVITY_TURN)

        telemetry = sim.run_until(lambda t: t.stage_fuel_pct <= 0.0, max_time=60.0)
        assert telemetry is not None
        assert 25.0 < telemetry.time_s < 35.0
        assert telemetry.altitude_m > 5000.0

        sim.stage()
        telemetry = sim.step()
        assert telemetry.stage_index == 1
        assert_allclose(telemetry.thrust_n, 200e3)
        assert_allclose(telemetry.mass_kg, 4500.0)

    def test_clear_history(self):
        sim = Simulator.from_launch_pad()
        sim.run(0.5)
        sim.clear_history()

        assert len(sim.get_history()) == 1
        assert sim.get_telemetry() == []


# =============================================================================
# Timekeeping Tests
# =============================================================================


class TestStepAccumulator:
    """Test wall-clock to tick conversion."""

    def test_whole_ticks_and_remainder(self):
        acc = StepAccumulator(dt=0.1)
        acc.accrue(0.25)

        assert acc.consume() == 2
        assert_allclose(acc.value, 0.05, atol=1e-12)

        acc.accrue(0.06)
        assert acc.consume() == 1

    def test_ignores_negative(self):
        acc = StepAccumulator(dt=0.1)
        acc.accrue(-1.0)
        assert acc.consume() == 0

    def test_substep_cap(self):
        """A long stall releases at most max_substeps and drops the rest."""
        acc = StepAccumulator(dt=0.1, max_substeps=5)
        acc.accrue(10.0)

        assert acc.consume() == 5
        assert acc.value == 0.0

    def test_invalid(self):
        with pytest.raises(ValueError, match="dt"):
            StepAccumulator(dt=0.0)
        with pytest.raises(ValueError, match="max_substeps"):
            StepAccumulator(dt=0.1, max_substeps=0)


class TestAdvance:
    """Test Simulator.advance."""

    def test_advance_carries_remainder(self):
        sim = Simulator.from_launch_pad()
        sim.set_throttle(1.0)

        assert sim.advance(2.5 * DT) == 2
        assert sim.advance(0.75 * DT) == 1
        assert_allclose(sim.time, 3 * DT, rtol=1e-12)

    def test_advance_cap(self):
        sim = Simulator(state=Simulator.from_launch_pad().state, max_substeps=10)
        assert sim.advance(5.0) == 10


# =============================================================================
# Results Tests
# =============================================================================


class TestSimulationResult:
    """Test recorded results and export."""

    def test_arrays(self):
        sim = Simulator.from_launch_pad()
        sim.set_throttle(1.0)
        sim.run(1.0)
        result = SimulationResult.from_simulator(sim)

        assert result.time.shape == (60,)
        assert result.position.shape == (60, 2)
        assert np.all(np.diff(result.altitude) > 0)
        assert np.all(np.diff(result.mass) < 0)

    def test_to_dataframe(self):
        sim = Simulator.from_launch_pad()
        sim.set_throttle(1.0)
        sim.run(0.5)
        df = SimulationResult.from_simulator(sim).to_dataframe()

        assert isinstance(df, pl.DataFrame)
        assert df.height == 30
        for column in ("time_s", "altitude_m", "apoapsis_m", "stage_index", "x", "y", "vx", "vy"):
            assert column in df.columns

    def test_empty_result(self):
        df = SimulationResult(states=[], telemetry=[]).to_dataframe()
        assert df.height == 0

    def test_length_mismatch(self):
        sim = Simulator.from_launch_pad()
        sim.run(0.1)
        with pytest.raises(ValueError, match="same length"):
            SimulationResult(states=sim.get_history(), telemetry=sim.get_telemetry())
