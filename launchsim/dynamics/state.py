"""2D state representation for the flight simulator.

The state contains:
- Position (2): [x, y] relative to the planet centre [m]
- Velocity (2): [vx, vy] [m/s]
- Acceleration (2): last applied acceleration [m/s^2]
- Rotation: commanded attitude [deg], 0 = radially outward, counter-clockwise positive
- Throttle: [0, 1]
- Stages: fixed-length tuple of RocketStage, burn order
- Current stage index, mission time, fixed timestep, pause flag, autopilot mode

Angle convention:
- Rotation is stored in degrees. It is converted to radians only at the point
  where the thrust direction is built (``attitude_vector``).
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.environment.gravity import MU_PLANET, R_PLANET
from launchsim.vehicle.staging import RocketStage, default_stages, total_mass

# =============================================================================
# Vector Utilities
# =============================================================================


def magnitude(v: NDArray[np.float64]) -> float:
    """Euclidean length of a 2D vector."""
    return float(math.hypot(v[0], v[1]))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Unit vector along ``v``; the zero vector maps to zero."""
    m = magnitude(v)
    if m == 0.0:
        return np.zeros(2)
    return np.array([v[0] / m, v[1] / m])


def rotate(v: NDArray[np.float64], angle: float) -> NDArray[np.float64]:
    """Rotate a 2D vector counter-clockwise by ``angle`` [rad]."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([v[0] * c - v[1] * s, v[0] * s + v[1] * c])


def wrap_degrees(angle: float) -> float:
    """Wrap an angle into (-180, 180] degrees."""
    wrapped = math.fmod(angle, 360.0)
    if wrapped > 180.0:
        wrapped -= 360.0
    elif wrapped <= -180.0:
        wrapped += 360.0
    return wrapped


def attitude_vector(position: NDArray[np.float64], rotation_deg: float) -> NDArray[np.float64]:
    """Unit thrust direction: local up rotated by the commanded attitude."""
    return rotate(normalize(position), math.radians(rotation_deg))


# =============================================================================
# Autopilot Mode
# =============================================================================


class AutopilotMode(Enum):
    """Attitude autopilot modes."""

    OFF = "OFF"
    GRAVITY_TURN = "GRAVITY_TURN"
    PROGRADE = "PROGRADE"
    RETROGRADE = "RETROGRADE"  # Accepted but applies no correction


# =============================================================================
# Simulation State
# =============================================================================


def _as_vector(value: Any, name: str) -> NDArray[np.float64]:
    arr = np.array(value, dtype=np.float64)
    if arr.shape != (2,):
        raise ValueError(f"{name} must be shape (2,), got {arr.shape}")
    return arr


@typechecked
@dataclass
class SimulationState:
    """Complete authoritative snapshot of the simulation.

    Attributes:
        position: [x, y] relative to the planet centre [m]
        velocity: [vx, vy] [m/s]
        stages: Stages in burn order (stored as a tuple)
        acceleration: Acceleration applied on the last tick [m/s^2]
        rotation: Commanded attitude [deg]
        throttle: Throttle setting (0 to 1)
        current_stage_index: Index of the stage eligible to burn
        time: Mission time [s]
        dt: Fixed physics timestep [s]
        is_paused: When True the step observes but does not advance
        autopilot_mode: Active autopilot mode
    """
    position: NDArray[np.float64] | Sequence[float]
    velocity: NDArray[np.float64] | Sequence[float]
    stages: Sequence[RocketStage]
    acceleration: NDArray[np.float64] | Sequence[float] = field(
        default_factory=lambda: np.zeros(2)
    )
    rotation: float = 0.0
    throttle: float = 0.0
    current_stage_index: int = 0
    time: float = 0.0
    dt: float = 1.0 / 60.0
    is_paused: bool = False
    autopilot_mode: AutopilotMode = AutopilotMode.OFF

    def __post_init__(self) -> None:
        """Validate and normalize state."""
        self.position = _as_vector(self.position, "Position")
        self.velocity = _as_vector(self.velocity, "Velocity")
        self.acceleration = _as_vector(self.acceleration, "Acceleration")
        self.stages = tuple(self.stages)
        self.rotation = float(self.rotation)
        self.throttle = float(self.throttle)
        self.time = float(self.time)
        self.dt = float(self.dt)

        if not self.stages:
            raise ValueError("At least one stage is required")
        if not 0 <= self.current_stage_index < len(self.stages):
            raise ValueError(
                f"current_stage_index {self.current_stage_index} out of range "
                f"for {len(self.stages)} stages"
            )
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if not 0.0 <= self.throttle <= 1.0:
            raise ValueError(f"throttle must be within [0, 1], got {self.throttle}")
        if magnitude(self.position) == 0.0:
            raise ValueError("Position cannot be at the planet centre")

    @classmethod
    def from_launch_pad(
        cls,
        stages: Sequence[RocketStage] | None = None,
        radius: float = R_PLANET,
        dt: float = 1.0 / 60.0,
    ) -> "SimulationState":
        """Create the initial state on the pad.

        The vehicle sits at the top of the planet, pointing straight up with
        the throttle closed and the simulation paused until ignition.

        Args:
            stages: Vehicle stages (defaults to the two-stage reference vehicle)
            radius: Planet surface radius [m]
            dt: Physics timestep [s]
        """
        return cls(
            position=np.array([0.0, radius]),
            velocity=np.zeros(2),
            stages=default_stages() if stages is None else stages,
            dt=dt,
            is_paused=True,
        )

    @classmethod
    def from_orbit(
        cls,
        altitude: float,
        stages: Sequence[RocketStage] | None = None,
        radius: float = R_PLANET,
        mu: float = MU_PLANET,
        dt: float = 1.0 / 60.0,
    ) -> "SimulationState":
        """Create a state in a circular, counter-clockwise orbit.

        The vehicle starts above the pole at ``(0, r)`` moving in -x, engine idle.

        Args:
            altitude: Orbital altitude [m]
            stages: Vehicle stages (defaults to the two-stage reference vehicle)
            radius: Planet surface radius [m]
            mu: Gravitational parameter [m^3/s^2]
            dt: Physics timestep [s]
        """
        r = radius + altitude
        v = math.sqrt(mu / r)
        return cls(
            position=np.array([0.0, r]),
            velocity=np.array([-v, 0.0]),
            stages=default_stages() if stages is None else stages,
            dt=dt,
        )

    def copy(self) -> "SimulationState":
        """Create an independent copy of this state."""
        return replace(
            self,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            acceleration=self.acceleration.copy(),
        )

    def evolve(self, **changes: Any) -> "SimulationState":
        """Copy of this state with some fields replaced."""
        return replace(self.copy(), **changes)

    @property
    def radius(self) -> float:
        """Distance from the planet centre [m]."""
        return magnitude(self.position)

    @property
    def altitude(self) -> float:
        """Height above the reference surface [m]."""
        return self.radius - R_PLANET

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return magnitude(self.velocity)

    @property
    def local_up(self) -> NDArray[np.float64]:
        """Radial outward unit vector."""
        return normalize(self.position)

    @property
    def active_stage(self) -> RocketStage:
        """Stage addressed by ``current_stage_index``."""
        return self.stages[self.current_stage_index]

    @property
    def total_mass(self) -> float:
        """Mass of all attached stages [kg]."""
        return total_mass(self.stages)
