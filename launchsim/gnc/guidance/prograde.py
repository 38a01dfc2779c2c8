"""Prograde hold guidance.

Points the vehicle along its velocity vector. The target is the signed angle
from local up to the velocity, counter-clockwise positive, which is the same
convention used to rotate the thrust vector off local up. Below a minimum
speed the velocity direction is noise, so the hold disengages.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.dynamics.state import normalize, wrap_degrees


@typechecked
@dataclass(frozen=True)
class ProgradeHold:
    """Velocity-following attitude target.

    Attributes:
        min_speed: Speed below which the hold is inactive [m/s]
    """
    min_speed: float = 20.0

    def is_engaged(self, speed: float) -> bool:
        """Whether the velocity is large enough to follow."""
        return speed > self.min_speed

    def target_attitude(
        self,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
    ) -> float:
        """Attitude aligning thrust with velocity, wrapped to (-180, 180] [deg]."""
        up = normalize(position)
        cross = up[0] * velocity[1] - up[1] * velocity[0]
        dot = up[0] * velocity[0] + up[1] * velocity[1]
        return wrap_degrees(math.degrees(math.atan2(cross, dot)))
