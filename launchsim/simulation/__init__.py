"""Simulation module for the 2D launch simulator.

Provides the pure fixed-timestep ``step`` function, the controls applied
between ticks, and a stateful ``Simulator`` driver that records history.

Example:
    >>> from launchsim.simulation import Simulator
    >>>
    >>> sim = Simulator.from_launch_pad()
    >>> sim.set_throttle(1.0)          # ignition resumes the paused sim
    >>>
    >>> while sim.altitude < 50_000:
    ...     telemetry = sim.step()
    ...     if telemetry.stage_fuel_pct == 0.0:
    ...         sim.stage()
"""

from launchsim.simulation import controls
from launchsim.simulation.controls import (
    nudge_pitch,
    set_autopilot,
    set_pitch,
    set_throttle,
    stage,
    toggle_pause,
)
from launchsim.simulation.engine import (
    ForceBreakdown,
    SimConfig,
    compute_forces,
    step,
)
from launchsim.simulation.simulator import (
    SimulationResult,
    Simulator,
    StepAccumulator,
)
from launchsim.simulation.telemetry import (
    TelemetryData,
    flight_phase,
    format_telemetry_summary,
)

__all__ = [
    # Engine
    "ForceBreakdown",
    "SimConfig",
    "compute_forces",
    "step",
    # Controls
    "controls",
    "nudge_pitch",
    "set_autopilot",
    "set_pitch",
    "set_throttle",
    "stage",
    "toggle_pause",
    # Driver
    "SimulationResult",
    "Simulator",
    "StepAccumulator",
    # Telemetry
    "TelemetryData",
    "flight_phase",
    "format_telemetry_summary",
]
