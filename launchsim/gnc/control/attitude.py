"""Proportional attitude filter.

The vehicle has no rotational dynamics: the autopilot writes the commanded
attitude directly. Each tick the attitude moves a fixed fraction of the way
to the target:

    rotation += (target - rotation) * dt * gain

There is no integral or derivative term. With ``dt * gain < 1`` the
response is a first-order lag that never overshoots.

Example:
    >>> from launchsim.gnc.control import ProportionalAttitudeController
    >>>
    >>> ctrl = ProportionalAttitudeController(gain=0.8)
    >>> rotation = ctrl.correct(rotation, target=45.0, dt=1 / 60)
"""

from dataclasses import dataclass

from launchsim.checks import typechecked


@typechecked
@dataclass(frozen=True)
class ProportionalAttitudeController:
    """Fixed-gain attitude nudge.

    Attributes:
        gain: Proportional gain [1/s]
    """
    gain: float

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.gain < 0:
            raise ValueError(f"gain must be non-negative, got {self.gain}")

    def correct(self, rotation: float, target: float, dt: float) -> float:
        """Attitude after one tick of correction [deg].

        Args:
            rotation: Current commanded attitude [deg]
            target: Target attitude [deg]
            dt: Time step [s]
        """
        return rotation + (target - rotation) * dt * self.gain
