"""Stage modeling for multi-stage launch vehicles.

A vehicle is an ordered, fixed-length sequence of stages; insertion order is
burn order. Stages are immutable values: burning fuel or separating a stage
produces a new ``RocketStage`` rather than mutating the old one, so a stage
sequence held by one state can never be changed through another.

Lifecycle of stage i:
    inactive -> active (previous stage separated) -> separated (terminal)

Example:
    >>> from launchsim.vehicle import RocketStage, total_mass
    >>>
    >>> booster = RocketStage(
    ...     id=0, dry_mass=2000, fuel_mass=8000, max_fuel=8000,
    ...     max_thrust=800e3, isp_sl=300, isp_vac=320, is_active=True,
    ... )
    >>> isp = booster.effective_isp(altitude=25_000)  # 310 s
    >>> booster = booster.burn(mass_flow=270.0, dt=1 / 60)
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from launchsim.checks import typechecked
from launchsim.environment.gravity import G0

# Altitude over which Isp blends from sea level to vacuum [m]
ISP_TRANSITION_ALTITUDE = 50_000.0


# =============================================================================
# Isp Blending
# =============================================================================


@typechecked
def atmospheric_factor(
    altitude: float,
    transition_altitude: float = ISP_TRANSITION_ALTITUDE,
) -> float:
    """Fraction of the way from sea level to vacuum engine performance.

    ``clamp(altitude / transition_altitude, 0, 1)``. This is a linear proxy for
    ambient pressure, not a pressure ratio.
    """
    return min(1.0, max(0.0, altitude / transition_altitude))


# =============================================================================
# Rocket Stage
# =============================================================================


@typechecked
@dataclass(frozen=True)
class RocketStage:
    """One detachable propulsion unit.

    Attributes:
        id: Ordinal within the vehicle
        dry_mass: Structural mass [kg]
        fuel_mass: Remaining propellant [kg]
        max_fuel: Propellant capacity [kg]
        max_thrust: Thrust at full throttle [N]
        isp_sl: Sea level specific impulse [s]
        isp_vac: Vacuum specific impulse [s]
        is_active: True only for the stage currently permitted to burn
        has_separated: True once jettisoned (terminal)
        name: Display name
    """
    id: int
    dry_mass: float
    fuel_mass: float
    max_fuel: float
    max_thrust: float
    isp_sl: float
    isp_vac: float
    is_active: bool = False
    has_separated: bool = False
    name: str = ""

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.dry_mass < 0:
            raise ValueError(f"dry_mass must be non-negative, got {self.dry_mass}")
        if self.max_fuel < 0:
            raise ValueError(f"max_fuel must be non-negative, got {self.max_fuel}")
        if not 0 <= self.fuel_mass <= self.max_fuel:
            raise ValueError(
                f"fuel_mass must be within [0, {self.max_fuel}], got {self.fuel_mass}"
            )
        if self.max_thrust < 0:
            raise ValueError(f"max_thrust must be non-negative, got {self.max_thrust}")
        if self.isp_sl <= 0 or self.isp_vac <= 0:
            raise ValueError("isp_sl and isp_vac must be positive")
        if self.is_active and self.has_separated:
            raise ValueError(f"Stage {self.id} cannot be both active and separated")

    @property
    def mass(self) -> float:
        """Current stage mass (dry + fuel) [kg]."""
        return self.dry_mass + self.fuel_mass

    @property
    def fuel_fraction(self) -> float:
        """Remaining fuel as a fraction of capacity (0 for an empty tank design)."""
        if self.max_fuel <= 0:
            return 0.0
        return self.fuel_mass / self.max_fuel

    @property
    def can_burn(self) -> bool:
        """Whether this stage is allowed to produce thrust."""
        return self.is_active and not self.has_separated and self.fuel_mass > 0

    def effective_isp(
        self,
        altitude: float,
        transition_altitude: float = ISP_TRANSITION_ALTITUDE,
    ) -> float:
        """Specific impulse blended between sea level and vacuum [s]."""
        factor = atmospheric_factor(altitude, transition_altitude)
        return self.isp_sl + (self.isp_vac - self.isp_sl) * factor

    def mass_flow(self, thrust: float, isp: float) -> float:
        """Propellant mass flow for a thrust at a given Isp [kg/s]."""
        return thrust / (isp * G0)

    def burn(self, mass_flow: float, dt: float) -> "RocketStage":
        """Consume propellant for one timestep, floored at an empty tank."""
        return replace(self, fuel_mass=max(0.0, self.fuel_mass - mass_flow * dt))

    def separated(self) -> "RocketStage":
        """This stage after jettison."""
        return replace(self, is_active=False, has_separated=True)

    def activated(self) -> "RocketStage":
        """This stage once it becomes the burning stage."""
        if self.has_separated:
            raise ValueError(f"Stage {self.id} has separated and cannot reactivate")
        return replace(self, is_active=True)


# =============================================================================
# Vehicle Helpers
# =============================================================================


@typechecked
def total_mass(stages: Sequence[RocketStage]) -> float:
    """Mass of everything still attached [kg].

    Separated stages contribute nothing, whatever their fuel field holds.
    """
    return float(sum(s.mass for s in stages if not s.has_separated))


@typechecked
def replace_stage(
    stages: Sequence[RocketStage],
    index: int,
    stage: RocketStage,
) -> tuple[RocketStage, ...]:
    """Return a new stage tuple with one entry swapped out."""
    updated = list(stages)
    updated[index] = stage
    return tuple(updated)


@typechecked
def default_stages() -> tuple[RocketStage, ...]:
    """The two-stage reference vehicle, booster active and fully fuelled."""
    return (
        RocketStage(
            id=0,
            name="S-IC Booster",
            dry_mass=2000.0,
            fuel_mass=8000.0,
            max_fuel=8000.0,
            max_thrust=800_000.0,
            isp_sl=300.0,
            isp_vac=320.0,
            is_active=True,
        ),
        RocketStage(
            id=1,
            name="S-IVB Upper",
            dry_mass=1000.0,
            fuel_mass=3500.0,
            max_fuel=3500.0,
            max_thrust=200_000.0,
            isp_sl=280.0,
            isp_vac=340.0,
        ),
    )
