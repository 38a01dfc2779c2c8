"""Guidance laws for the launch vehicle.

Provide attitude targets for the autopilot to track.
"""

from launchsim.gnc.guidance.gravity_turn import (
    GravityTurnProgram,
)
from launchsim.gnc.guidance.prograde import (
    ProgradeHold,
)

__all__ = [
    "GravityTurnProgram",
    "ProgradeHold",
]
