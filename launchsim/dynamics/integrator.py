"""Translational integration and surface contact.

The integrator is semi-implicit (symplectic) Euler:

    v_{n+1} = v_n + a_n * dt
    p_{n+1} = p_n + v_{n+1} * dt

Updating position with the new velocity keeps orbits bounded where explicit
Euler spirals outward. Acceleration is evaluated once per tick from the
current state.

Surface contact is a terminal clamp: a position below the surface is
projected radially onto it and the velocity is zeroed. There is no bounce.
"""

import logging
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.dynamics.state import magnitude

logger = logging.getLogger(__name__)


class GroundContact(NamedTuple):
    """Outcome of the surface constraint pass."""
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    in_contact: bool
    impact_speed: float  # Speed just before the clamp [m/s]


@typechecked
def semi_implicit_euler_step(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    acceleration: NDArray[np.float64],
    dt: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Advance position and velocity by one timestep.

    Args:
        position: Current position [m]
        velocity: Current velocity [m/s]
        acceleration: Acceleration held constant over the step [m/s^2]
        dt: Time step [s]

    Returns:
        (position, velocity) after the step
    """
    velocity_new = velocity + acceleration * dt
    position_new = position + velocity_new * dt
    return position_new, velocity_new


@typechecked
def resolve_ground_contact(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    surface_radius: float,
) -> GroundContact:
    """Clamp a position that has passed below the surface.

    Args:
        position: Position after integration [m]
        velocity: Velocity after integration [m/s]
        surface_radius: Planet radius [m]

    Returns:
        GroundContact with the constrained position and velocity
    """
    r = magnitude(position)
    if r >= surface_radius:
        return GroundContact(position, velocity, False, 0.0)

    impact_speed = magnitude(velocity)
    if r > 0.0:
        surface_position = position / r * surface_radius
    else:
        # Degenerate: no radial direction, put the vehicle back on the pad
        surface_position = np.array([0.0, surface_radius])

    # Crash/damage modelling would hook in here; contact is only reported
    logger.debug("Ground contact at %.1f m/s", impact_speed)

    return GroundContact(surface_position, np.zeros(2), True, impact_speed)
