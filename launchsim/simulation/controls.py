"""Control surface applied between ticks.

Each control is a pure function ``(state, ...) -> new_state``. They are the
only way stage activation, pause and autopilot mode change; the physics step
itself never stages the vehicle or resumes it.

Example:
    >>> from launchsim.simulation import controls
    >>>
    >>> state = controls.set_throttle(state, 1.0)   # also resumes a paused sim
    >>> state = controls.stage(state)               # jettison and ignite next
"""

import logging

from launchsim.checks import typechecked
from launchsim.dynamics.state import AutopilotMode, SimulationState
from launchsim.vehicle.staging import replace_stage

logger = logging.getLogger(__name__)

# Arrow-key pitch increment [deg]
PITCH_NUDGE_DEG = 2.0


@typechecked
def set_throttle(state: SimulationState, value: float) -> SimulationState:
    """Set the throttle, clamped to [0, 1].

    Opening the throttle on a paused simulation also resumes it.
    """
    throttle = min(1.0, max(0.0, float(value)))
    resume = state.is_paused and throttle > 0.0
    if resume:
        logger.info("Throttle %.2f resumes simulation at t=%.2f s", throttle, state.time)
    return state.evolve(
        throttle=throttle,
        is_paused=False if resume else state.is_paused,
    )


@typechecked
def set_pitch(state: SimulationState, degrees: float) -> SimulationState:
    """Set the attitude directly. Manual input disengages the autopilot."""
    if state.autopilot_mode is not AutopilotMode.OFF:
        logger.info("Manual pitch input; autopilot %s disengaged", state.autopilot_mode.value)
    return state.evolve(rotation=float(degrees), autopilot_mode=AutopilotMode.OFF)


@typechecked
def nudge_pitch(state: SimulationState, delta_deg: float = PITCH_NUDGE_DEG) -> SimulationState:
    """Step the attitude by ``delta_deg`` (counter-clockwise positive)."""
    return set_pitch(state, state.rotation + delta_deg)


@typechecked
def stage(state: SimulationState) -> SimulationState:
    """Separate the current stage and ignite the next one at full throttle.

    Does nothing when the last stage is already active.
    """
    index = state.current_stage_index
    if index >= len(state.stages) - 1:
        logger.debug("Stage command ignored: stage %d is the last stage", index)
        return state.copy()

    stages = replace_stage(state.stages, index, state.stages[index].separated())
    stages = replace_stage(stages, index + 1, stages[index + 1].activated())

    logger.info(
        "Stage separation at t=%.2f s: stage %d jettisoned, stage %d active",
        state.time, index, index + 1,
    )
    return state.evolve(
        stages=stages,
        current_stage_index=index + 1,
        throttle=1.0,
    )


@typechecked
def toggle_pause(state: SimulationState) -> SimulationState:
    """Flip the pause flag."""
    paused = not state.is_paused
    logger.debug("Simulation %s at t=%.2f s", "paused" if paused else "resumed", state.time)
    return state.evolve(is_paused=paused)


@typechecked
def set_autopilot(state: SimulationState, mode: AutopilotMode) -> SimulationState:
    """Select the autopilot mode."""
    logger.info("Autopilot mode %s -> %s", state.autopilot_mode.value, mode.value)
    return state.evolve(autopilot_mode=mode)
