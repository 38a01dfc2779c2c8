"""Orbital mechanics utilities with numba optimization.

Derives the shape of the current two-body orbit from a 2D state vector.
The core computation is numba-compiled for use inside the per-tick step.

Key functions:
- compute_orbital_elements: energy, eccentricity vector, apoapsis/periapsis
- circular_velocity / escape_velocity: reference speeds at an altitude
- orbital_period: period from semi-major axis

Open orbits (specific energy >= 0) report apoapsis as +inf and periapsis as
-inf; the semi-major-axis formulas have no physical meaning there.

Example:
    >>> from launchsim.orbital import compute_orbital_elements
    >>>
    >>> elements = compute_orbital_elements(position, velocity)
    >>> print(f"Apoapsis: {elements.apoapsis_alt/1000:.1f} km")
    >>> print(f"Periapsis: {elements.periapsis_alt/1000:.1f} km")
"""

import math
from typing import NamedTuple

import numpy as np
from numba import njit
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.environment.gravity import MU_PLANET, R_PLANET

# =============================================================================
# Data Classes
# =============================================================================


class OrbitalElements(NamedTuple):
    """Planar orbital elements.

    Attributes:
        specific_energy: Specific orbital energy [J/kg]
        semi_major_axis: Semi-major axis [m] (inf for open orbits)
        eccentricity: Orbital eccentricity [-]
        eccentricity_vector: [ex, ey], points at periapsis [-]
        apoapsis_alt: Apoapsis altitude above surface [m]
        periapsis_alt: Periapsis altitude above surface [m]
        period: Orbital period [s] (0 for open orbits)
    """
    specific_energy: float
    semi_major_axis: float
    eccentricity: float
    eccentricity_vector: tuple[float, float]
    apoapsis_alt: float
    periapsis_alt: float
    period: float

    @property
    def is_bound(self) -> bool:
        """True for elliptical (closed) orbits."""
        return self.specific_energy < 0.0


# =============================================================================
# Core Numba Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _orbital_elements_core(
    rx: float, ry: float,
    vx: float, vy: float,
    mu: float = MU_PLANET,
) -> tuple[float, float, float, float, float]:
    """Numba-optimized energy and eccentricity vector.

    Returns tuple of:
        (energy, sma, ex, ey, ecc); sma is 0.0 when the orbit is open
    """
    r = np.sqrt(rx*rx + ry*ry)
    v_sq = vx*vx + vy*vy

    # Specific orbital energy
    energy = v_sq / 2.0 - mu / r

    if energy < 0.0:
        sma = -mu / (2.0 * energy)
    else:
        sma = 0.0

    # e = ((v^2 - mu/r) r - (r.v) v) / mu
    rdotv = rx*vx + ry*vy
    c = v_sq - mu / r
    ex = (c * rx - rdotv * vx) / mu
    ey = (c * ry - rdotv * vy) / mu
    ecc = np.sqrt(ex*ex + ey*ey)

    return (energy, sma, ex, ey, ecc)


@njit(cache=True, fastmath=True)
def _circular_velocity(altitude: float, mu: float = MU_PLANET, r_body: float = R_PLANET) -> float:
    """Circular orbital velocity at altitude."""
    r = r_body + altitude
    return np.sqrt(mu / r)


@njit(cache=True, fastmath=True)
def _escape_velocity(altitude: float, mu: float = MU_PLANET, r_body: float = R_PLANET) -> float:
    """Escape velocity at altitude."""
    r = r_body + altitude
    return np.sqrt(2.0 * mu / r)


@njit(cache=True, fastmath=True)
def _orbital_period(semi_major_axis: float, mu: float = MU_PLANET) -> float:
    """Orbital period from semi-major axis."""
    if semi_major_axis <= 0:
        return 0.0
    return 2.0 * np.pi * np.sqrt(semi_major_axis**3 / mu)


# =============================================================================
# Public API
# =============================================================================


@typechecked
def compute_orbital_elements(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    mu: float = MU_PLANET,
    r_body: float = R_PLANET,
) -> OrbitalElements:
    """Compute orbital elements from a position/velocity state vector.

    Args:
        position: [x, y] relative to the planet centre [m]
        velocity: [vx, vy] [m/s]
        mu: Gravitational parameter [m^3/s^2]
        r_body: Planet radius for altitudes [m]

    Returns:
        OrbitalElements, with infinite apsides for open orbits
    """
    rx, ry = float(position[0]), float(position[1])
    if rx == 0.0 and ry == 0.0:
        raise ValueError("Orbital elements are undefined at the planet centre")

    energy, sma, ex, ey, ecc = _orbital_elements_core(
        rx, ry, float(velocity[0]), float(velocity[1]), mu
    )

    if energy >= 0.0:
        return OrbitalElements(
            specific_energy=energy,
            semi_major_axis=math.inf,
            eccentricity=ecc,
            eccentricity_vector=(ex, ey),
            apoapsis_alt=math.inf,
            periapsis_alt=-math.inf,
            period=0.0,
        )

    return OrbitalElements(
        specific_energy=energy,
        semi_major_axis=sma,
        eccentricity=ecc,
        eccentricity_vector=(ex, ey),
        apoapsis_alt=sma * (1.0 + ecc) - r_body,
        periapsis_alt=sma * (1.0 - ecc) - r_body,
        period=_orbital_period(sma, mu),
    )


@typechecked
def circular_velocity(altitude: float, mu: float = MU_PLANET, r_body: float = R_PLANET) -> float:
    """Compute circular orbital velocity.

    Args:
        altitude: Orbital altitude [m]
        mu: Gravitational parameter [m^3/s^2]
        r_body: Planet radius [m]

    Returns:
        Circular velocity [m/s]
    """
    return float(_circular_velocity(altitude, mu, r_body))


@typechecked
def escape_velocity(altitude: float, mu: float = MU_PLANET, r_body: float = R_PLANET) -> float:
    """Compute escape velocity.

    Args:
        altitude: Altitude [m]
        mu: Gravitational parameter [m^3/s^2]
        r_body: Planet radius [m]

    Returns:
        Escape velocity [m/s]
    """
    return float(_escape_velocity(altitude, mu, r_body))


@typechecked
def orbital_period(semi_major_axis: float, mu: float = MU_PLANET) -> float:
    """Compute orbital period.

    Args:
        semi_major_axis: Semi-major axis [m]
        mu: Gravitational parameter [m^3/s^2]

    Returns:
        Period [s]
    """
    return float(_orbital_period(semi_major_axis, mu))
