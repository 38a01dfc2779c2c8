"""Point-mass gravity for the reference planet.

The planet is a single point mass at the origin of the 2D inertial frame.
Gravity is the inverse-square field ``g = mu / r^2`` pointing at the centre.
The core function is numba-compiled for use in the per-tick step.

Example:
    >>> from launchsim.environment import Gravity
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(position)  # [gx, gy] in m/s^2
    >>> g_mag = grav.magnitude(R_PLANET)  # ~9.82 m/s^2 at the surface
"""

from dataclasses import dataclass

import numpy as np
from numba import njit
from numpy.typing import NDArray

from launchsim.checks import typechecked

# =============================================================================
# Constants
# =============================================================================

G: float = 6.67430e-11  # Gravitational constant [m^3/(kg*s^2)]
M_PLANET: float = 5.972e24  # Planet mass [kg]
R_PLANET: float = 6_371_000.0  # Mean planet radius [m]
MU_PLANET: float = G * M_PLANET  # Gravitational parameter [m^3/s^2]

# Standard gravity, used for specific impulse
G0: float = 9.80665  # [m/s^2]

# Radius floor for the field evaluation (avoids the singularity at the centre)
R_MIN: float = 1e3  # [m]


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _point_mass_gravity(
    x: float, y: float,
    mu: float = MU_PLANET,
) -> tuple[float, float]:
    """Numba-optimized inverse-square gravity.

    g = -mu/r^2 * r_hat
    """
    r_sq = x*x + y*y
    r = np.sqrt(r_sq)

    if r < R_MIN:
        r = R_MIN
        r_sq = r * r

    g_over_r = mu / (r_sq * r)

    return (-g_over_r * x, -g_over_r * y)


# =============================================================================
# Gravity Model
# =============================================================================


@typechecked
@dataclass(frozen=True)
class Gravity:
    """Inverse-square gravity of the reference planet.

    Attributes:
        mu: Gravitational parameter [m^3/s^2]
        radius: Planet surface radius [m]
    """
    mu: float = MU_PLANET
    radius: float = R_PLANET

    def __post_init__(self) -> None:
        if self.mu <= 0:
            raise ValueError(f"mu must be positive, got {self.mu}")
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    def acceleration(self, position: NDArray[np.float64]) -> NDArray[np.float64]:
        """Gravitational acceleration at a position [m/s^2].

        Args:
            position: [x, y] relative to the planet centre [m]
        """
        gx, gy = _point_mass_gravity(float(position[0]), float(position[1]), self.mu)
        return np.array([gx, gy])

    def magnitude(self, r: float) -> float:
        """Gravitational acceleration magnitude at distance ``r`` from the centre."""
        r = max(r, R_MIN)
        return self.mu / (r * r)

    def altitude(self, position: NDArray[np.float64]) -> float:
        """Height above the surface for a position [m]."""
        return float(np.hypot(position[0], position[1])) - self.radius
