"""launchsim - Real-time 2D launch vehicle flight simulation.

This package provides a deterministic, fixed-timestep physics core for a
multi-stage rocket flying in the orbital plane of a spherical planet:
inverse-square gravity, an exponential atmosphere with Mach-dependent drag,
altitude-blended engine performance, staging, a simple attitude autopilot
and two-body orbit prediction.

Example:
    >>> from launchsim import SimulationState, step, set_throttle
    >>>
    >>> state = SimulationState.from_launch_pad()
    >>> state = set_throttle(state, 1.0)
    >>> state, telemetry = step(state)
    >>> print(f"Thrust: {telemetry.thrust_n / 1000:.0f} kN")
"""

__version__ = "0.1.0"

# State and dynamics
from launchsim.dynamics import (
    AutopilotMode,
    SimulationState,
)

# Environment
from launchsim.environment import (
    ExponentialAtmosphere,
    Gravity,
)

# Guidance and control
from launchsim.gnc import (
    Autopilot,
)

# Orbital mechanics
from launchsim.orbital import (
    OrbitalElements,
    circular_velocity,
    compute_orbital_elements,
    escape_velocity,
)

# Physics step, controls and driver
from launchsim.simulation import (
    SimConfig,
    SimulationResult,
    Simulator,
    TelemetryData,
    nudge_pitch,
    set_autopilot,
    set_pitch,
    set_throttle,
    stage,
    step,
    toggle_pause,
)

# Vehicle
from launchsim.vehicle import (
    RocketStage,
    SimpleAero,
    default_stages,
)

__all__ = [
    "__version__",
    # State
    "AutopilotMode",
    "SimulationState",
    # Environment
    "ExponentialAtmosphere",
    "Gravity",
    # GNC
    "Autopilot",
    # Orbital
    "OrbitalElements",
    "circular_velocity",
    "compute_orbital_elements",
    "escape_velocity",
    # Simulation
    "SimConfig",
    "SimulationResult",
    "Simulator",
    "TelemetryData",
    "nudge_pitch",
    "set_autopilot",
    "set_pitch",
    "set_throttle",
    "stage",
    "step",
    "toggle_pause",
    # Vehicle
    "RocketStage",
    "SimpleAero",
    "default_stages",
]
