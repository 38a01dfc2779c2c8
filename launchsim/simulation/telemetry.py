"""Telemetry snapshot produced by every physics step.

``TelemetryData`` is a read-only projection of one tick. It is rebuilt from
scratch each step and holds no reference into the simulation state. Field
names carry their units.
"""

import math
from typing import NamedTuple

from launchsim.checks import typechecked

# Altitude bands for flight phase classification [m]
LAUNCH_PAD_CEILING = 1_000.0
SPACE_FLOOR = 100_000.0


class TelemetryData(NamedTuple):
    """Derived flight data for one tick."""
    time_s: float                 # Mission time after the tick [s]
    altitude_m: float             # Altitude above surface [m]
    speed_mps: float              # Speed [m/s]
    acceleration_mps2: float      # Applied acceleration magnitude [m/s^2]
    dynamic_pressure_pa: float    # Dynamic pressure [Pa]
    mach_number: float            # Mach number [-]
    pitch_deg: float              # Attitude used this tick [deg]
    apoapsis_m: float             # Apoapsis altitude, +inf on escape [m]
    periapsis_m: float            # Periapsis altitude, -inf on escape [m]
    drag_n: float                 # Drag force magnitude [N]
    thrust_n: float               # Thrust force magnitude [N]
    gravity_n: float              # Weight [N]
    mass_kg: float                # Vehicle mass [kg]
    density_kgpm3: float          # Air density [kg/m^3]
    stage_fuel_pct: float         # Active stage fuel remaining [%]
    stage_index: int              # Current stage index
    vehicle_inert: bool           # True when nothing with mass is left

    @property
    def g_load(self) -> float:
        """Acceleration in standard gravities."""
        return self.acceleration_mps2 / 9.80665

    @property
    def is_orbital(self) -> bool:
        """Periapsis above the atmosphere on a closed orbit."""
        return math.isfinite(self.apoapsis_m) and self.periapsis_m > SPACE_FLOOR


@typechecked
def flight_phase(telemetry: TelemetryData) -> str:
    """Coarse flight phase from altitude."""
    if telemetry.altitude_m < LAUNCH_PAD_CEILING:
        return "Launch Pad"
    if telemetry.altitude_m > SPACE_FLOOR:
        return "Orbit/Space"
    return "Atmospheric Flight"


def _format_apsis(value: float) -> str:
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    return f"{value / 1000:.1f} km"


@typechecked
def format_telemetry_summary(telemetry: TelemetryData, stage_name: str = "") -> str:
    """Format telemetry as a readable summary string.

    Args:
        telemetry: Telemetry snapshot
        stage_name: Optional name of the active stage

    Returns:
        Formatted multi-line string
    """
    stage_label = stage_name or f"Stage {telemetry.stage_index}"
    lines = [
        "=" * 60,
        f"FLIGHT TELEMETRY  T+{telemetry.time_s:.1f} s",
        "=" * 60,
        f"Phase:            {flight_phase(telemetry)}",
        "",
        "KINEMATICS:",
        f"  Altitude:       {telemetry.altitude_m / 1000:.2f} km",
        f"  Speed:          {telemetry.speed_mps:.1f} m/s (Mach {telemetry.mach_number:.2f})",
        f"  Acceleration:   {telemetry.acceleration_mps2:.2f} m/s^2 ({telemetry.g_load:.2f} g)",
        f"  Pitch:          {telemetry.pitch_deg:.1f} deg",
        "",
        "ORBIT:",
        f"  Apoapsis:       {_format_apsis(telemetry.apoapsis_m)}",
        f"  Periapsis:      {_format_apsis(telemetry.periapsis_m)}",
        "",
        "LOADS:",
        f"  Dyn Pressure:   {telemetry.dynamic_pressure_pa / 1000:.2f} kPa",
        f"  Density:        {telemetry.density_kgpm3:.4f} kg/m^3",
        f"  Thrust:         {telemetry.thrust_n / 1000:.1f} kN",
        f"  Drag:           {telemetry.drag_n / 1000:.2f} kN",
        f"  Weight:         {telemetry.gravity_n / 1000:.1f} kN",
        "",
        "VEHICLE:",
        f"  Mass:           {telemetry.mass_kg:.0f} kg",
        f"  {stage_label + ':':<16}{telemetry.stage_fuel_pct:.1f}% fuel",
    ]
    if telemetry.vehicle_inert:
        lines.append("  Status:         INERT")
    lines.append("=" * 60)

    return "\n".join(lines)
