"""Visualization module for launchsim.

Provides plotting functions for:
- Flight profile dashboards (altitude, speed, dynamic pressure, mass)
- Ground-track style trajectory views around the planet

All plots use matplotlib with a consistent, professional style.
"""

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from launchsim.checks import typechecked
from launchsim.environment.gravity import R_PLANET
from launchsim.simulation.simulator import SimulationResult

# =============================================================================
# Plot Style Configuration
# =============================================================================

# Professional color palette
COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "planet": "#454545",  # Dark gray for the surface
    "fill": "#E8E8E8",  # Light gray for fill
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

# Default figure size
DEFAULT_FIGSIZE = (12, 8)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "figure.titlesize": 16,
            "grid.alpha": 0.5,
            "grid.linewidth": 0.8,
        }
    )


def _staging_times(result: SimulationResult) -> list[float]:
    """Times at which the active stage index advanced."""
    times = []
    previous = None
    for t in result.telemetry:
        if previous is not None and t.stage_index > previous:
            times.append(t.time_s)
        previous = t.stage_index
    return times


# =============================================================================
# Flight Profile
# =============================================================================


@typechecked
def plot_flight_profile(
    result: SimulationResult,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str | None = None,
) -> Figure:
    """Plot altitude, speed, dynamic pressure and mass against time.

    Stage separations are marked on every panel.

    Args:
        result: Recorded simulation run
        figsize: Figure size (width, height) in inches
        title: Optional custom title

    Returns:
        matplotlib Figure with four subplots
    """
    _setup_style()

    time = result.time
    q_kpa = np.array([t.dynamic_pressure_pa for t in result.telemetry]) / 1000

    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    (ax_alt, ax_speed), (ax_q, ax_mass) = axes

    ax_alt.plot(time, result.altitude / 1000, color=COLORS["primary"], linewidth=2)
    ax_alt.set_ylabel("Altitude (km)")
    ax_alt.set_title("Altitude")

    ax_speed.plot(time, result.speed, color=COLORS["accent"], linewidth=2)
    ax_speed.set_ylabel("Speed (m/s)")
    ax_speed.set_title("Speed")

    ax_q.plot(time, q_kpa, color=COLORS["secondary"], linewidth=2)
    if len(q_kpa) > 0:
        i_max = int(np.argmax(q_kpa))
        ax_q.plot(time[i_max], q_kpa[i_max], "o", color=COLORS["secondary"], label="Max-Q")
        ax_q.legend()
    ax_q.set_ylabel("Dynamic Pressure (kPa)")
    ax_q.set_title("Dynamic Pressure")

    ax_mass.plot(time, result.mass, color=COLORS["planet"], linewidth=2)
    ax_mass.set_ylabel("Mass (kg)")
    ax_mass.set_title("Vehicle Mass")

    for ax in axes.flat:
        for t_sep in _staging_times(result):
            ax.axvline(x=t_sep, color=COLORS["grid"], linestyle="--", linewidth=1)
        ax.grid(True, alpha=0.3)
    for ax in axes[1]:
        ax.set_xlabel("Time (s)")

    fig.suptitle(title or "Flight Profile", fontsize=14)
    fig.tight_layout()
    return fig


# =============================================================================
# Trajectory
# =============================================================================


@typechecked
def plot_trajectory(
    result: SimulationResult,
    planet_radius: float = R_PLANET,
    figsize: tuple[float, float] = (8, 8),
    zoom: bool = True,
) -> Figure:
    """Plot the path in the orbital plane with the planet outline.

    Args:
        result: Recorded simulation run
        planet_radius: Surface radius [m]
        figsize: Figure size
        zoom: Fit the axes to the flown path instead of the whole planet

    Returns:
        matplotlib Figure
    """
    _setup_style()

    fig, ax = plt.subplots(figsize=figsize)

    theta = np.linspace(0, 2 * np.pi, 720)
    r_km = planet_radius / 1000
    ax.fill(r_km * np.cos(theta), r_km * np.sin(theta), color=COLORS["fill"])
    ax.plot(r_km * np.cos(theta), r_km * np.sin(theta), color=COLORS["planet"], linewidth=1.5)

    position_km = result.position / 1000
    if len(position_km) > 0:
        ax.plot(position_km[:, 0], position_km[:, 1], color=COLORS["primary"], linewidth=2,
                label="Trajectory")
        ax.plot(position_km[0, 0], position_km[0, 1], "o", color=COLORS["accent"], label="Start")
        ax.legend()

        if zoom:
            span = np.ptp(position_km, axis=0).max()
            pad = max(span * 0.2, 50.0)
            center = position_km.mean(axis=0)
            half = span / 2 + pad
            ax.set_xlim(center[0] - half, center[0] + half)
            ax.set_ylim(center[1] - half, center[1] + half)

    ax.set_aspect("equal")
    ax.set_xlabel("x (km)")
    ax.set_ylabel("y (km)")
    ax.set_title("Trajectory")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig
