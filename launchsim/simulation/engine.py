"""Fixed-timestep physics engine.

``step`` is a pure transformation ``(state) -> (next_state, telemetry)``,
called once per tick by an external driver. It never mutates its argument.

Pipeline, in order (later stages depend on earlier results):
    1. Kinematics   radius, altitude, speed
    2. Forces       gravity, drag, thrust
    3. Propulsion   active stage fuel burn (mass is taken before the burn)
    4. Integration  semi-implicit Euler
    5. Orbit        apoapsis/periapsis from the pre-collision state
    6. Collision    clamp to the surface
    7. Autopilot    attitude for the next tick
    8. Telemetry

A paused tick still runs forces and telemetry but skips the burn,
integration, collision pass, autopilot and clock. A vehicle with no mass
left is inert: nothing is integrated and the acceleration is zero.

Example:
    >>> from launchsim.dynamics import SimulationState
    >>> from launchsim.simulation import step
    >>>
    >>> state = SimulationState.from_launch_pad()
    >>> state = state.evolve(throttle=1.0, is_paused=False)
    >>> state, telemetry = step(state)
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.dynamics.integrator import resolve_ground_contact, semi_implicit_euler_step
from launchsim.dynamics.state import SimulationState, attitude_vector, magnitude
from launchsim.environment.atmosphere import ExponentialAtmosphere
from launchsim.environment.gravity import Gravity
from launchsim.gnc.autopilot import Autopilot
from launchsim.orbital import compute_orbital_elements
from launchsim.simulation.telemetry import TelemetryData
from launchsim.vehicle.aerodynamics import SimpleAero
from launchsim.vehicle.staging import ISP_TRANSITION_ALTITUDE, replace_stage, total_mass

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@typechecked
@dataclass
class SimConfig:
    """Physics configuration.

    Attributes:
        gravity: Planet gravity model (also supplies the surface radius)
        atmosphere: Atmosphere model
        aero: Drag model
        autopilot: Attitude autopilot
        isp_transition_altitude: Altitude over which Isp reaches vacuum [m]
    """
    gravity: Gravity = field(default_factory=Gravity)
    atmosphere: ExponentialAtmosphere = field(default_factory=ExponentialAtmosphere)
    aero: SimpleAero = field(default_factory=SimpleAero)
    autopilot: Autopilot = field(default_factory=Autopilot)
    isp_transition_altitude: float = ISP_TRANSITION_ALTITUDE


# =============================================================================
# Force Model
# =============================================================================


class ForceBreakdown(NamedTuple):
    """Forces acting on the vehicle for one tick.

    Evaluated from the state at the start of the tick.
    """
    gravity: NDArray[np.float64]         # Weight vector [N]
    drag: NDArray[np.float64]            # Drag vector [N]
    thrust: NDArray[np.float64]          # Thrust vector [N]
    gravity_accel: NDArray[np.float64]   # Gravitational acceleration [m/s^2]
    mass: float                          # Vehicle mass [kg]
    mass_flow: float                     # Active stage propellant flow [kg/s]
    density: float                       # Air density [kg/m^3]
    dynamic_pressure: float              # q [Pa]
    mach: float                          # Mach number [-]

    @property
    def net(self) -> NDArray[np.float64]:
        """Net force [N]."""
        return self.gravity + self.drag + self.thrust

    @property
    def thrust_magnitude(self) -> float:
        """Thrust magnitude [N]."""
        return magnitude(self.thrust)


@typechecked
def compute_forces(state: SimulationState, config: SimConfig) -> ForceBreakdown:
    """Evaluate gravity, drag and thrust for the current state.

    Args:
        state: State at the start of the tick
        config: Physics configuration

    Returns:
        ForceBreakdown for this tick
    """
    position = state.position
    velocity = state.velocity
    altitude = magnitude(position) - config.gravity.radius
    speed = magnitude(velocity)
    mass = total_mass(state.stages)

    # Gravity
    g_accel = config.gravity.acceleration(position)

    # Atmosphere and drag
    rho = config.atmosphere.density(altitude)
    mach = config.atmosphere.mach_number(speed)
    q = 0.5 * rho * speed * speed
    drag = config.aero.drag_force(velocity, q, mach)

    # Thrust
    stage = state.active_stage
    thrust = np.zeros(2)
    mass_flow = 0.0
    if stage.can_burn:
        isp = stage.effective_isp(altitude, config.isp_transition_altitude)
        thrust_mag = stage.max_thrust * state.throttle
        mass_flow = stage.mass_flow(thrust_mag, isp)
        thrust = thrust_mag * attitude_vector(position, state.rotation)

    return ForceBreakdown(
        gravity=g_accel * mass,
        drag=drag,
        thrust=thrust,
        gravity_accel=g_accel,
        mass=mass,
        mass_flow=mass_flow,
        density=rho,
        dynamic_pressure=q,
        mach=mach,
    )


# =============================================================================
# Step
# =============================================================================


@typechecked
def step(
    state: SimulationState,
    config: SimConfig | None = None,
) -> tuple[SimulationState, TelemetryData]:
    """Advance the simulation by one fixed timestep.

    Args:
        state: Current state (not modified)
        config: Physics configuration (defaults to ``SimConfig()``)

    Returns:
        (next_state, telemetry)
    """
    config = config or SimConfig()
    current = state.copy()
    dt = current.dt
    paused = current.is_paused
    surface_radius = config.gravity.radius

    # 1-2. Kinematics and forces from the start-of-tick state
    altitude = magnitude(current.position) - surface_radius
    forces = compute_forces(current, config)
    inert = forces.mass <= 0.0

    # 3. Propellant
    stages = current.stages
    if not paused and forces.mass_flow > 0.0:
        index = current.current_stage_index
        stages = replace_stage(stages, index, stages[index].burn(forces.mass_flow, dt))

    if inert:
        logger.debug("Vehicle has no mass at t=%.3f s; holding inert state", current.time)
        acceleration = np.zeros(2)
    else:
        acceleration = forces.net / forces.mass

    # 4. Integration
    position, velocity = current.position, current.velocity
    time = current.time
    if not paused:
        if not inert:
            position, velocity = semi_implicit_euler_step(position, velocity, acceleration, dt)
        time += dt

    # 5. Orbit shape before the surface clamp
    elements = compute_orbital_elements(
        position, velocity, config.gravity.mu, surface_radius
    )

    # 6. Surface contact
    if not paused:
        contact = resolve_ground_contact(position, velocity, surface_radius)
        position, velocity = contact.position, contact.velocity

    # 7. Autopilot, for the next tick
    rotation = current.rotation
    if not paused and not inert:
        rotation = config.autopilot.command(
            current.autopilot_mode,
            current.rotation,
            current.position,
            current.velocity,
            altitude,
            dt,
        )

    next_state = current.evolve(
        position=position,
        velocity=velocity,
        acceleration=acceleration,
        rotation=rotation,
        stages=stages,
        time=time,
    )

    # 8. Telemetry
    next_altitude = magnitude(next_state.position) - surface_radius
    next_speed = magnitude(next_state.velocity)
    rho = config.atmosphere.density(next_altitude)
    active = next_state.active_stage

    telemetry = TelemetryData(
        time_s=next_state.time,
        altitude_m=next_altitude,
        speed_mps=next_speed,
        acceleration_mps2=magnitude(acceleration),
        dynamic_pressure_pa=0.5 * rho * next_speed * next_speed,
        mach_number=config.atmosphere.mach_number(next_speed),
        pitch_deg=current.rotation,
        apoapsis_m=elements.apoapsis_alt,
        periapsis_m=elements.periapsis_alt,
        drag_n=magnitude(forces.drag),
        thrust_n=forces.thrust_magnitude,
        gravity_n=magnitude(forces.gravity),
        mass_kg=forces.mass,
        density_kgpm3=rho,
        stage_fuel_pct=active.fuel_fraction * 100.0,
        stage_index=next_state.current_stage_index,
        vehicle_inert=inert,
    )

    return next_state, telemetry
