"""Unit tests for the state representation and integrator."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from launchsim.dynamics import (
    AutopilotMode,
    SimulationState,
    attitude_vector,
    normalize,
    resolve_ground_contact,
    rotate,
    semi_implicit_euler_step,
    wrap_degrees,
)
from launchsim.environment import MU_PLANET, R_PLANET
from launchsim.vehicle import default_stages

# =============================================================================
# Vector Utility Tests
# =============================================================================


class TestVectorUtilities:
    """Test 2D vector helpers."""

    def test_normalize(self):
        assert_allclose(normalize(np.array([3.0, 4.0])), [0.6, 0.8])

    def test_normalize_zero(self):
        """The zero vector has no direction and maps to zero."""
        assert_allclose(normalize(np.zeros(2)), [0.0, 0.0])

    def test_rotate_counter_clockwise(self):
        """Positive angles rotate counter-clockwise."""
        assert_allclose(rotate(np.array([1.0, 0.0]), math.pi / 2), [0.0, 1.0], atol=1e-15)

    def test_wrap_degrees(self):
        """Angles wrap into (-180, 180]."""
        assert wrap_degrees(190.0) == -170.0
        assert wrap_degrees(180.0) == 180.0
        assert wrap_degrees(-180.0) == 180.0
        assert wrap_degrees(540.0) == 180.0
        assert wrap_degrees(-45.0) == -45.0

    def test_attitude_vector(self):
        """Zero attitude is local up; +90 deg turns counter-clockwise."""
        pos = np.array([0.0, R_PLANET])

        assert_allclose(attitude_vector(pos, 0.0), [0.0, 1.0], atol=1e-15)
        assert_allclose(attitude_vector(pos, 90.0), [-1.0, 0.0], atol=1e-15)
        assert_allclose(attitude_vector(pos, -90.0), [1.0, 0.0], atol=1e-15)

    def test_attitude_vector_is_unit(self):
        pos = np.array([1.2e6, -6.1e6])
        assert_allclose(np.linalg.norm(attitude_vector(pos, 37.0)), 1.0, rtol=1e-12)


# =============================================================================
# State Tests
# =============================================================================


class TestSimulationState:
    """Test SimulationState construction and helpers."""

    def test_from_launch_pad(self):
        """Pad state: top of the planet, at rest, paused, throttle closed."""
        state = SimulationState.from_launch_pad()

        assert_allclose(state.position, [0.0, R_PLANET])
        assert_allclose(state.velocity, [0.0, 0.0])
        assert state.is_paused
        assert state.throttle == 0.0
        assert state.current_stage_index == 0
        assert state.autopilot_mode is AutopilotMode.OFF
        assert_allclose(state.dt, 1.0 / 60.0)
        assert state.altitude == 0.0

    def test_from_orbit(self):
        """Circular orbit state has circular speed at the requested altitude."""
        alt = 300e3
        state = SimulationState.from_orbit(alt)

        assert_allclose(state.altitude, alt, rtol=1e-12)
        assert_allclose(state.speed, np.sqrt(MU_PLANET / (R_PLANET + alt)), rtol=1e-12)
        assert not state.is_paused

    def test_sequences_converted(self):
        """Lists become float arrays and stages become a tuple."""
        state = SimulationState(
            position=[0, R_PLANET], velocity=[1, 2], stages=list(default_stages()),
        )

        assert state.position.dtype == np.float64
        assert isinstance(state.stages, tuple)

    def test_copy_is_independent(self):
        """Mutating a copy's arrays leaves the original untouched."""
        state = SimulationState.from_launch_pad()
        clone = state.copy()
        clone.position[0] = 123.0
        clone.velocity[1] = 5.0

        assert state.position[0] == 0.0
        assert state.velocity[1] == 0.0

    def test_evolve(self):
        """evolve replaces fields and revalidates."""
        state = SimulationState.from_launch_pad()
        moved = state.evolve(throttle=0.5, is_paused=False)

        assert moved.throttle == 0.5
        assert not moved.is_paused
        assert state.is_paused

        with pytest.raises(ValueError, match="throttle"):
            state.evolve(throttle=1.5)

    def test_total_mass(self):
        state = SimulationState.from_launch_pad()
        assert state.total_mass == 14500.0
        assert state.active_stage.name == "S-IC Booster"

    def test_invalid_position_shape(self):
        with pytest.raises(ValueError, match="shape"):
            SimulationState(position=[0.0, 1.0, 2.0], velocity=[0.0, 0.0], stages=default_stages())

    def test_position_at_centre_rejected(self):
        with pytest.raises(ValueError, match="centre"):
            SimulationState(position=[0.0, 0.0], velocity=[0.0, 0.0], stages=default_stages())

    def test_empty_stages_rejected(self):
        with pytest.raises(ValueError, match="stage"):
            SimulationState(position=[0.0, R_PLANET], velocity=[0.0, 0.0], stages=())

    def test_stage_index_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            SimulationState(
                position=[0.0, R_PLANET], velocity=[0.0, 0.0],
                stages=default_stages(), current_stage_index=2,
            )

    def test_non_positive_dt(self):
        with pytest.raises(ValueError, match="dt"):
            SimulationState.from_launch_pad(dt=0.0)


# =============================================================================
# Integrator Tests
# =============================================================================


class TestSemiImplicitEuler:
    """Test the symplectic Euler update."""

    def test_velocity_then_position(self):
        """Position advances with the updated velocity."""
        pos, vel = semi_implicit_euler_step(
            np.array([0.0, 0.0]), np.array([1.0, 0.0]), np.array([0.0, 2.0]), 0.5,
        )

        assert_allclose(vel, [1.0, 1.0])
        assert_allclose(pos, [0.5, 0.5])

    def test_inputs_not_modified(self):
        position = np.array([1.0, 1.0])
        velocity = np.array([0.0, 0.0])
        semi_implicit_euler_step(position, velocity, np.array([1.0, 1.0]), 1.0)

        assert_allclose(position, [1.0, 1.0])
        assert_allclose(velocity, [0.0, 0.0])


class TestGroundContact:
    """Test the surface constraint."""

    def test_below_surface_clamped(self):
        """Position is projected onto the surface and velocity zeroed."""
        contact = resolve_ground_contact(
            np.array([0.0, R_PLANET - 10.0]), np.array([3.0, -4.0]), R_PLANET,
        )

        assert contact.in_contact
        assert_allclose(np.linalg.norm(contact.position), R_PLANET, rtol=1e-12)
        assert_allclose(contact.position, [0.0, R_PLANET])
        assert np.all(contact.velocity == 0.0)
        assert_allclose(contact.impact_speed, 5.0)

    def test_oblique_projection_keeps_direction(self):
        """Projection is radial."""
        position = np.array([3.0, 4.0]) / 5.0 * (R_PLANET - 50.0)
        contact = resolve_ground_contact(position, np.array([10.0, -10.0]), R_PLANET)

        assert_allclose(contact.position, np.array([3.0, 4.0]) / 5.0 * R_PLANET, rtol=1e-12)

    def test_above_surface_untouched(self):
        position = np.array([0.0, R_PLANET + 1.0])
        velocity = np.array([0.0, -1.0])
        contact = resolve_ground_contact(position, velocity, R_PLANET)

        assert not contact.in_contact
        assert_allclose(contact.position, position)
        assert_allclose(contact.velocity, velocity)

    def test_degenerate_centre(self):
        """A vehicle at the exact centre is placed back on the pad."""
        contact = resolve_ground_contact(np.zeros(2), np.array([1.0, 0.0]), R_PLANET)
        assert_allclose(contact.position, [0.0, R_PLANET])
