"""Unit tests for orbital mechanics utilities.

Tests the numba-optimized orbital mechanics functions for accuracy.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from launchsim.environment import MU_PLANET, R_PLANET
from launchsim.orbital import (
    circular_velocity,
    compute_orbital_elements,
    escape_velocity,
    orbital_period,
)

# =============================================================================
# Orbital Elements Tests
# =============================================================================


class TestOrbitalElements:
    """Test orbital element computation."""

    def test_circular_orbit_400km(self):
        """Circular orbit at 400 km has equal apsides."""
        alt = 400e3
        r = R_PLANET + alt
        v = np.sqrt(MU_PLANET / r)

        elements = compute_orbital_elements(np.array([0.0, r]), np.array([-v, 0.0]))

        assert_allclose(elements.semi_major_axis, r, rtol=1e-9)
        assert elements.eccentricity < 1e-8
        assert_allclose(elements.apoapsis_alt, alt, rtol=1e-6)
        assert_allclose(elements.periapsis_alt, alt, rtol=1e-6)
        assert elements.is_bound

    def test_elliptical_from_periapsis(self):
        """10% over circular speed at periapsis gives e = 0.21."""
        r = R_PLANET + 200e3
        v = 1.1 * np.sqrt(MU_PLANET / r)

        elements = compute_orbital_elements(np.array([r, 0.0]), np.array([0.0, v]))
        a = r / (1.0 - 0.21)

        assert_allclose(elements.eccentricity, 0.21, rtol=1e-9)
        assert_allclose(elements.periapsis_alt, 200e3, rtol=1e-6)
        assert_allclose(elements.apoapsis_alt, a * 1.21 - R_PLANET, rtol=1e-9)

    def test_eccentricity_vector_points_at_periapsis(self):
        """At periapsis the eccentricity vector is along the position."""
        r = R_PLANET + 200e3
        v = 1.1 * np.sqrt(MU_PLANET / r)

        elements = compute_orbital_elements(np.array([0.0, r]), np.array([-v, 0.0]))
        ex, ey = elements.eccentricity_vector

        assert_allclose(ex, 0.0, atol=1e-12)
        assert ey > 0

    def test_specific_energy(self):
        position = np.array([0.0, R_PLANET + 100e3])
        velocity = np.array([7000.0, 1000.0])
        elements = compute_orbital_elements(position, velocity)

        expected = 0.5 * np.dot(velocity, velocity) - MU_PLANET / np.linalg.norm(position)
        assert_allclose(elements.specific_energy, expected, rtol=1e-12)

    def test_period(self):
        r = R_PLANET + 400e3
        v = np.sqrt(MU_PLANET / r)
        elements = compute_orbital_elements(np.array([r, 0.0]), np.array([0.0, v]))

        assert_allclose(elements.period, 2 * np.pi * np.sqrt(r**3 / MU_PLANET), rtol=1e-9)

    def test_suborbital_periapsis_below_surface(self):
        """A vertical hop has periapsis deep below the surface."""
        elements = compute_orbital_elements(
            np.array([0.0, R_PLANET + 10e3]), np.array([0.0, 500.0]),
        )

        assert elements.periapsis_alt < -R_PLANET * 0.9
        assert elements.apoapsis_alt > 10e3

    def test_centre_rejected(self):
        with pytest.raises(ValueError, match="centre"):
            compute_orbital_elements(np.zeros(2), np.array([1.0, 0.0]))


class TestEscapeBoundary:
    """Open orbits report infinite apsides."""

    def test_zero_energy_exactly(self):
        """Parabolic state (energy exactly zero) is treated as open."""
        elements = compute_orbital_elements(
            np.array([1.0, 0.0]), np.array([0.0, 2.0]), mu=2.0, r_body=0.5,
        )

        assert elements.specific_energy == 0.0
        assert elements.apoapsis_alt == math.inf
        assert elements.periapsis_alt == -math.inf
        assert elements.period == 0.0
        assert not elements.is_bound

    def test_hyperbolic(self):
        """Just above escape speed."""
        alt = 300e3
        v = 1.001 * escape_velocity(alt)

        elements = compute_orbital_elements(
            np.array([0.0, R_PLANET + alt]), np.array([-v, 0.0]),
        )

        assert elements.apoapsis_alt == math.inf
        assert elements.periapsis_alt == -math.inf
        assert elements.eccentricity > 1.0

    def test_just_below_escape_is_bound(self):
        alt = 300e3
        v = 0.999 * escape_velocity(alt)

        elements = compute_orbital_elements(
            np.array([0.0, R_PLANET + alt]), np.array([-v, 0.0]),
        )

        assert elements.is_bound
        assert math.isfinite(elements.apoapsis_alt)


# =============================================================================
# Reference Speed Tests
# =============================================================================


class TestReferenceSpeeds:
    """Test circular and escape velocity helpers."""

    def test_circular_velocity_surface(self):
        assert_allclose(circular_velocity(0.0), np.sqrt(MU_PLANET / R_PLANET), rtol=1e-12)
        assert 7900 < circular_velocity(0.0) < 7920

    def test_escape_is_sqrt2_circular(self):
        alt = 500e3
        assert_allclose(escape_velocity(alt), np.sqrt(2) * circular_velocity(alt), rtol=1e-12)

    def test_orbital_period(self):
        a = R_PLANET + 400e3
        assert_allclose(orbital_period(a), 2 * np.pi * np.sqrt(a**3 / MU_PLANET), rtol=1e-12)

    def test_orbital_period_open(self):
        assert orbital_period(0.0) == 0.0
