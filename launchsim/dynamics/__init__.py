"""Dynamics for the 2D flight simulator: state vector and integration."""

from launchsim.dynamics.integrator import (
    GroundContact,
    resolve_ground_contact,
    semi_implicit_euler_step,
)
from launchsim.dynamics.state import (
    AutopilotMode,
    SimulationState,
    attitude_vector,
    magnitude,
    normalize,
    rotate,
    wrap_degrees,
)

__all__ = [
    "AutopilotMode",
    "GroundContact",
    "SimulationState",
    "attitude_vector",
    "magnitude",
    "normalize",
    "resolve_ground_contact",
    "rotate",
    "semi_implicit_euler_step",
    "wrap_degrees",
]
