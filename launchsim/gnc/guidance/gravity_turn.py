"""Gravity turn guidance for rocket ascent.

An altitude-scheduled pitch program. The vehicle climbs vertically until the
pitch-over altitude, then the target pitch ramps linearly with altitude
until it reaches the cap:

    target(h) = min(max_pitch, (h - start_altitude) * pitch_rate)

Pitch is measured from local vertical in the same sense as the vehicle
rotation, so 90 deg is horizontal.

Example:
    >>> from launchsim.gnc.guidance import GravityTurnProgram
    >>>
    >>> program = GravityTurnProgram()
    >>> if program.is_engaged(altitude):
    ...     pitch_cmd = program.target_pitch(altitude)  # degrees
"""

from dataclasses import dataclass

from launchsim.checks import typechecked


@typechecked
@dataclass(frozen=True)
class GravityTurnProgram:
    """Linear pitch-versus-altitude schedule.

    Attributes:
        start_altitude: Pitch-over altitude [m]
        pitch_rate: Pitch gained per metre climbed above start [deg/m]
        max_pitch: Final pitch from vertical [deg]
    """
    start_altitude: float = 500.0
    pitch_rate: float = 1.0 / 700.0
    max_pitch: float = 90.0

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.pitch_rate <= 0:
            raise ValueError(f"pitch_rate must be positive, got {self.pitch_rate}")

    def is_engaged(self, altitude: float) -> bool:
        """Whether the vehicle is above the pitch-over altitude."""
        return altitude > self.start_altitude

    def target_pitch(self, altitude: float) -> float:
        """Commanded pitch from vertical at an altitude [deg]."""
        ramp = (altitude - self.start_altitude) * self.pitch_rate
        return min(self.max_pitch, max(0.0, ramp))
