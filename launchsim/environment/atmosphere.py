"""Exponential atmosphere with a hard vacuum cutoff.

Density falls off exponentially with a single scale height:

    rho(h) = rho0 * exp(-h / H)     for 0 <= h <= 80 km
    rho(h) = rho0                   for h < 0 (clamped, not extrapolated)
    rho(h) = 0                      for h > 80 km

Density is discontinuous at the ceiling. Speed of sound is a fixed
340 m/s, so Mach number depends on speed only.

Example:
    >>> from launchsim.environment import ExponentialAtmosphere
    >>>
    >>> atm = ExponentialAtmosphere()
    >>> result = atm.at_altitude(10000, velocity=300.0)
    >>> print(f"Density: {result.density:.4f} kg/m^3")
    >>> print(f"q: {result.dynamic_pressure:.0f} Pa, Mach {result.mach_number:.2f}")
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked

# =============================================================================
# Constants
# =============================================================================

RHO0 = 1.225  # Sea level density [kg/m^3]
P0 = 101325.0  # Sea level pressure [Pa]
SCALE_HEIGHT = 8500.0  # Density scale height [m]
ATMOSPHERE_CEILING = 80_000.0  # Altitude above which density is zero [m]
SPEED_OF_SOUND = 340.0  # Fixed speed of sound [m/s]


# =============================================================================
# Result Classes
# =============================================================================


@typechecked
@dataclass(frozen=True)
class AtmosphereResult:
    """Atmospheric conditions at a given altitude.

    Attributes:
        altitude: Altitude above the surface [m]
        density: Air density [kg/m^3]
        pressure: Static pressure [Pa]
        speed_of_sound: Speed of sound [m/s]
        mach_number: Mach number if velocity provided
        dynamic_pressure: Dynamic pressure if velocity provided [Pa]
    """
    altitude: float
    density: float
    pressure: float
    speed_of_sound: float
    mach_number: float | None = None
    dynamic_pressure: float | None = None

    @property
    def is_vacuum(self) -> bool:
        """Check if altitude is above the atmosphere ceiling."""
        return self.density == 0.0


# =============================================================================
# Atmosphere Model
# =============================================================================


@typechecked
@dataclass(frozen=True)
class ExponentialAtmosphere:
    """Isothermal exponential atmosphere.

    Attributes:
        sea_level_density: Density at h = 0 [kg/m^3]
        sea_level_pressure: Pressure at h = 0 [Pa]
        scale_height: e-folding height [m]
        ceiling: Hard vacuum cutoff altitude [m]
        speed_of_sound: Fixed speed of sound [m/s]
    """
    sea_level_density: float = RHO0
    sea_level_pressure: float = P0
    scale_height: float = SCALE_HEIGHT
    ceiling: float = ATMOSPHERE_CEILING
    speed_of_sound: float = SPEED_OF_SOUND

    def __post_init__(self) -> None:
        if self.scale_height <= 0:
            raise ValueError(f"scale_height must be positive, got {self.scale_height}")
        if self.speed_of_sound <= 0:
            raise ValueError(f"speed_of_sound must be positive, got {self.speed_of_sound}")

    def _falloff(self, altitude: float) -> float:
        """Fraction of the sea level value remaining at altitude."""
        if altitude < 0:
            return 1.0
        if altitude > self.ceiling:
            return 0.0
        return math.exp(-altitude / self.scale_height)

    def density(self, altitude: float) -> float:
        """Get density at altitude.

        Args:
            altitude: Altitude above the surface [m]

        Returns:
            Density [kg/m^3]
        """
        return self.sea_level_density * self._falloff(altitude)

    def pressure(self, altitude: float) -> float:
        """Get static pressure at altitude [Pa]."""
        return self.sea_level_pressure * self._falloff(altitude)

    def mach_number(self, speed: float) -> float:
        """Mach number for a speed [m/s]."""
        return speed / self.speed_of_sound

    def dynamic_pressure(self, altitude: float, speed: float) -> float:
        """Get dynamic pressure (q = 0.5 * rho * v^2).

        Args:
            altitude: Altitude above the surface [m]
            speed: Airspeed [m/s]

        Returns:
            Dynamic pressure [Pa]
        """
        return 0.5 * self.density(altitude) * speed * speed

    def at_altitude(
        self,
        altitude: float,
        velocity: float | None = None,
    ) -> AtmosphereResult:
        """Get all atmospheric properties at altitude.

        Args:
            altitude: Altitude above the surface [m]
            velocity: Optional speed for Mach number and dynamic pressure [m/s]
        """
        rho = self.density(altitude)
        if velocity is None:
            mach = None
            q = None
        else:
            mach = self.mach_number(velocity)
            q = 0.5 * rho * velocity * velocity

        return AtmosphereResult(
            altitude=altitude,
            density=rho,
            pressure=self.pressure(altitude),
            speed_of_sound=self.speed_of_sound,
            mach_number=mach,
            dynamic_pressure=q,
        )

    def profile(
        self,
        altitudes: NDArray[np.float64] | list[float],
    ) -> dict[str, NDArray[np.float64]]:
        """Get density and pressure over a range of altitudes."""
        altitudes = np.asarray(altitudes, dtype=np.float64)

        return {
            "altitude": altitudes,
            "density": np.array([self.density(float(h)) for h in altitudes]),
            "pressure": np.array([self.pressure(float(h)) for h in altitudes]),
        }
