"""Attitude autopilot.

Dispatches on ``AutopilotMode`` to a guidance law and filters the result
through a proportional controller. The engine runs the autopilot after
integration, so the attitude it returns is the one used on the next tick.

Modes:
- OFF: no correction
- GRAVITY_TURN: altitude-scheduled pitch program, gain 0.8
- PROGRADE: follow the velocity vector, gain 2.0
- RETROGRADE: accepted but applies no correction
"""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.dynamics.state import AutopilotMode, magnitude
from launchsim.gnc.control.attitude import ProportionalAttitudeController
from launchsim.gnc.guidance.gravity_turn import GravityTurnProgram
from launchsim.gnc.guidance.prograde import ProgradeHold


@typechecked
@dataclass(frozen=True)
class Autopilot:
    """Mode-switched attitude autopilot.

    Attributes:
        gravity_turn: Pitch program used in GRAVITY_TURN
        prograde: Velocity hold used in PROGRADE
        gravity_turn_control: Filter for GRAVITY_TURN
        prograde_control: Filter for PROGRADE
    """
    gravity_turn: GravityTurnProgram = field(default_factory=GravityTurnProgram)
    prograde: ProgradeHold = field(default_factory=ProgradeHold)
    gravity_turn_control: ProportionalAttitudeController = field(
        default_factory=lambda: ProportionalAttitudeController(gain=0.8)
    )
    prograde_control: ProportionalAttitudeController = field(
        default_factory=lambda: ProportionalAttitudeController(gain=2.0)
    )

    def target(
        self,
        mode: AutopilotMode,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
        altitude: float,
    ) -> float | None:
        """Attitude target for a mode, or None when the mode is not steering [deg]."""
        if mode is AutopilotMode.GRAVITY_TURN:
            if self.gravity_turn.is_engaged(altitude):
                return self.gravity_turn.target_pitch(altitude)
        elif mode is AutopilotMode.PROGRADE:
            if self.prograde.is_engaged(magnitude(velocity)):
                return self.prograde.target_attitude(position, velocity)
        return None

    def command(
        self,
        mode: AutopilotMode,
        rotation: float,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
        altitude: float,
        dt: float,
    ) -> float:
        """Commanded attitude for the next tick [deg].

        Args:
            mode: Active autopilot mode
            rotation: Attitude used this tick [deg]
            position: Position the tick's forces were computed from [m]
            velocity: Velocity the tick's forces were computed from [m/s]
            altitude: Altitude matching ``position`` [m]
            dt: Time step [s]
        """
        target = self.target(mode, position, velocity, altitude)
        if target is None:
            return rotation

        if mode is AutopilotMode.GRAVITY_TURN:
            return self.gravity_turn_control.correct(rotation, target, dt)
        return self.prograde_control.correct(rotation, target, dt)
