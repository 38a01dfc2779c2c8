"""Control algorithms for the launch vehicle."""

from launchsim.gnc.control.attitude import (
    ProportionalAttitudeController,
)

__all__ = [
    "ProportionalAttitudeController",
]
