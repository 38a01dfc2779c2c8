"""Aerodynamics model for the launch vehicle.

Drag only, with a Mach-dependent drag coefficient:
- Subsonic (M < 0.8): Cd = Cd_sub
- Transonic (0.8 <= M <= 1.2): linear ramp from Cd_sub to Cd_super
- Supersonic (M > 1.2): Cd = Cd_super

The ramp approximates the transonic drag rise. There is no lift and no
angle-of-attack dependence.

Example:
    >>> from launchsim.vehicle import SimpleAero
    >>>
    >>> aero = SimpleAero()
    >>> cd = aero.drag_coefficient(mach=1.0)  # midway through the ramp
    >>> f = aero.drag_force(velocity, dynamic_pressure=q, mach=1.0)
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked

# =============================================================================
# Constants
# =============================================================================

CD_SUBSONIC = 0.35
CD_SUPERSONIC = 0.55
REFERENCE_AREA = 1.2  # [m^2]

# Below this speed the drag direction is undefined and drag is zero
MIN_DRAG_SPEED = 0.1  # [m/s]


# =============================================================================
# Simple Aerodynamics Model
# =============================================================================


@typechecked
@dataclass(frozen=True)
class SimpleAero:
    """Piecewise-linear drag model.

    Attributes:
        cd_subsonic: Drag coefficient below the transonic band
        cd_supersonic: Drag coefficient above the transonic band
        reference_area: Aerodynamic reference area [m^2]
        transonic_start: Mach number where the ramp begins
        transonic_end: Mach number where the ramp ends
    """
    cd_subsonic: float = CD_SUBSONIC
    cd_supersonic: float = CD_SUPERSONIC
    reference_area: float = REFERENCE_AREA
    transonic_start: float = 0.8
    transonic_end: float = 1.2

    def __post_init__(self) -> None:
        if self.transonic_end <= self.transonic_start:
            raise ValueError("transonic_end must be greater than transonic_start")
        if self.reference_area < 0:
            raise ValueError(f"reference_area must be non-negative, got {self.reference_area}")

    def drag_coefficient(self, mach: float) -> float:
        """Get drag coefficient as a function of Mach number.

        Args:
            mach: Mach number

        Returns:
            Drag coefficient
        """
        if mach < self.transonic_start:
            return self.cd_subsonic
        if mach > self.transonic_end:
            return self.cd_supersonic

        frac = (mach - self.transonic_start) / (self.transonic_end - self.transonic_start)
        return self.cd_subsonic + (self.cd_supersonic - self.cd_subsonic) * frac

    def drag_magnitude(self, dynamic_pressure: float, mach: float) -> float:
        """Drag force magnitude q * Cd * A [N]."""
        return dynamic_pressure * self.drag_coefficient(mach) * self.reference_area

    def drag_force(
        self,
        velocity: NDArray[np.float64],
        dynamic_pressure: float,
        mach: float,
    ) -> NDArray[np.float64]:
        """Drag force vector opposing the velocity [N].

        Args:
            velocity: Inertial velocity [m/s]
            dynamic_pressure: q [Pa]
            mach: Mach number

        Returns:
            [Fx, Fy], zero when speed is below ``MIN_DRAG_SPEED``
        """
        speed = float(np.hypot(velocity[0], velocity[1]))
        if speed <= MIN_DRAG_SPEED:
            return np.zeros(2)

        return -self.drag_magnitude(dynamic_pressure, mach) * velocity / speed
