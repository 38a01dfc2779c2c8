#!/usr/bin/env python
"""Two-stage ascent example for launchsim.

Flies the reference two-stage vehicle from the pad:

1. Ignite the booster (opening the throttle resumes the paused simulation)
2. Fly the gravity turn program until the booster is dry
3. Stage, hold prograde and burn the upper stage to depletion
4. Coast and report the resulting orbit
5. Save plots and the flight log

All outputs are written to outputs/ascent_to_orbit/.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt

from launchsim.dynamics import AutopilotMode
from launchsim.plotting import plot_flight_profile, plot_trajectory
from launchsim.simulation import (
    SimulationResult,
    Simulator,
    flight_phase,
    format_telemetry_summary,
)

COAST_TIME = 120.0  # s


def main() -> None:
    """Run the ascent example."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("launchsim - Two-Stage Ascent Example")
    print("=" * 60)
    print()

    sim = Simulator.from_launch_pad()
    booster, upper = sim.state.stages

    # =========================================================================
    # Booster
    # =========================================================================
    print(f"Igniting {booster.name}...")
    sim.set_throttle(1.0)
    sim.set_autopilot(AutopilotMode.GRAVITY_TURN)

    telemetry = sim.run_until(lambda t: t.stage_fuel_pct <= 0.0, max_time=120.0)
    if telemetry is None:
        raise RuntimeError("Booster did not burn out")
    print(format_telemetry_summary(telemetry, stage_name=booster.name))
    print()

    # =========================================================================
    # Upper stage
    # =========================================================================
    print(f"Staging, igniting {upper.name}...")
    sim.stage()
    sim.set_autopilot(AutopilotMode.PROGRADE)

    telemetry = sim.run_until(lambda t: t.stage_fuel_pct <= 0.0, max_time=300.0)
    if telemetry is None:
        raise RuntimeError("Upper stage did not burn out")
    print(format_telemetry_summary(telemetry, stage_name=upper.name))
    print()

    # =========================================================================
    # Coast
    # =========================================================================
    print(f"Coasting for {COAST_TIME:.0f} s...")
    sim.set_throttle(0.0)
    telemetry = sim.run(COAST_TIME)
    print(format_telemetry_summary(telemetry, stage_name=upper.name))
    print(f"Final phase: {flight_phase(telemetry)}")
    print()

    # =========================================================================
    # Outputs
    # =========================================================================
    output_dir = Path("outputs/ascent_to_orbit")
    output_dir.mkdir(parents=True, exist_ok=True)

    result = SimulationResult.from_simulator(sim)

    fig = plot_flight_profile(result, title="Two-Stage Ascent")
    fig.savefig(output_dir / "flight_profile.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"   Plot saved: {output_dir}/flight_profile.png")

    fig = plot_trajectory(result)
    fig.savefig(output_dir / "trajectory.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"   Plot saved: {output_dir}/trajectory.png")

    result.to_dataframe().write_csv(output_dir / "flight_log.csv")
    print(f"   Data saved: {output_dir}/flight_log.csv")

    print()
    print("=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
