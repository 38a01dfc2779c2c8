"""Environment models for the flight simulator.

Provides the reference planet's gravity field and its exponential atmosphere.

Example:
    >>> from launchsim.environment import ExponentialAtmosphere, Gravity
    >>>
    >>> atm = ExponentialAtmosphere()
    >>> rho = atm.density(altitude=10000)  # kg/m^3
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(position)  # m/s^2
"""

from launchsim.environment.atmosphere import (
    AtmosphereResult,
    ExponentialAtmosphere,
)
from launchsim.environment.gravity import (
    G0,
    MU_PLANET,
    R_PLANET,
    Gravity,
)

__all__ = [
    "AtmosphereResult",
    "ExponentialAtmosphere",
    "G0",
    "Gravity",
    "MU_PLANET",
    "R_PLANET",
]
