"""GNC (Guidance, Navigation, Control) module for the launch vehicle.

Provides the guidance laws and attitude filter behind the autopilot.

Example:
    >>> from launchsim.gnc import Autopilot
    >>> from launchsim.dynamics import AutopilotMode
    >>>
    >>> autopilot = Autopilot()
    >>> rotation = autopilot.command(
    ...     AutopilotMode.GRAVITY_TURN, rotation, position, velocity, altitude, dt,
    ... )
"""

from launchsim.gnc.autopilot import (
    Autopilot,
)
from launchsim.gnc.control import (
    ProportionalAttitudeController,
)
from launchsim.gnc.guidance import (
    GravityTurnProgram,
    ProgradeHold,
)

__all__ = [
    "Autopilot",
    # Control
    "ProportionalAttitudeController",
    # Guidance
    "GravityTurnProgram",
    "ProgradeHold",
]
