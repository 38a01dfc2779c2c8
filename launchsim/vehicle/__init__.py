"""Vehicle modeling for the flight simulator.

Provides stage definitions, mass bookkeeping and the drag model.

Example:
    >>> from launchsim.vehicle import SimpleAero, default_stages, total_mass
    >>>
    >>> stages = default_stages()
    >>> print(f"Liftoff mass: {total_mass(stages):.0f} kg")
    >>> aero = SimpleAero(reference_area=1.2)
"""

from launchsim.vehicle.aerodynamics import (
    SimpleAero,
)
from launchsim.vehicle.staging import (
    RocketStage,
    atmospheric_factor,
    default_stages,
    replace_stage,
    total_mass,
)

__all__ = [
    # Stages
    "RocketStage",
    "atmospheric_factor",
    "default_stages",
    "replace_stage",
    "total_mass",
    # Aerodynamics
    "SimpleAero",
]
