"""Step-driven simulation driver.

Wraps the pure ``step`` function with the bookkeeping a frontend or script
needs: it owns the current state, records history, applies controls between
ticks, and converts elapsed wall-clock time into whole fixed ticks.

Architecture:
    The driver owns the loop and calls:
    - sim.set_throttle(...), sim.stage(), ... -> controls between ticks
    - sim.step() -> one fixed tick of physics
    - sim.advance(elapsed) -> as many ticks as the elapsed time covers

Example:
    >>> from launchsim.simulation import SimulationResult, Simulator
    >>>
    >>> sim = Simulator.from_launch_pad()
    >>> sim.set_throttle(1.0)
    >>> sim.run(duration=60.0)
    >>> sim.stage()
    >>> result = SimulationResult.from_simulator(sim)
    >>> df = result.to_dataframe()
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np
import polars as pl
from numpy.typing import NDArray

from launchsim.checks import typechecked
from launchsim.dynamics.state import AutopilotMode, SimulationState
from launchsim.simulation import controls
from launchsim.simulation.engine import SimConfig, step
from launchsim.simulation.telemetry import TelemetryData
from launchsim.vehicle.staging import RocketStage

logger = logging.getLogger(__name__)

# =============================================================================
# Fixed-Step Timekeeping
# =============================================================================


@typechecked
@dataclass
class StepAccumulator:
    """Accumulates elapsed time and releases it in whole fixed ticks.

    The fractional remainder carries to the next call. When more than
    ``max_substeps`` ticks are owed at once, the excess is dropped so a long
    stall cannot trigger a burst of catch-up ticks.

    Attributes:
        dt: Fixed tick length [s]
        max_substeps: Most ticks released per call
        value: Banked time not yet simulated [s]
    """
    dt: float
    max_substeps: int = 240
    value: float = 0.0

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.max_substeps < 1:
            raise ValueError(f"max_substeps must be at least 1, got {self.max_substeps}")

    def accrue(self, elapsed: float) -> None:
        if elapsed > 0.0:
            self.value += elapsed

    def clear(self) -> None:
        self.value = 0.0

    def consume(self) -> int:
        """Number of ticks to run now."""
        owed = math.floor(self.value / self.dt)
        if owed <= 0:
            return 0
        if owed > self.max_substeps:
            logger.warning(
                "Dropping %d ticks (%.3f s) of simulation backlog",
                owed - self.max_substeps, (owed - self.max_substeps) * self.dt,
            )
            self.value = 0.0
            return self.max_substeps
        self.value -= owed * self.dt
        return owed


# =============================================================================
# Simulator
# =============================================================================


@typechecked
@dataclass
class Simulator:
    """Stateful driver around the pure physics step.

    Example:
        >>> sim = Simulator.from_launch_pad()
        >>> sim.set_throttle(1.0)
        >>> sim.set_autopilot(AutopilotMode.GRAVITY_TURN)
        >>> telemetry = sim.run_until(lambda t: t.altitude_m > 10_000, max_time=300.0)
    """
    state: SimulationState
    config: SimConfig = field(default_factory=SimConfig)
    max_substeps: int = 240

    # Internal
    _accumulator: StepAccumulator = field(init=False, repr=False)
    _history: list[SimulationState] = field(default_factory=list, init=False, repr=False)
    _telemetry: list[TelemetryData] = field(default_factory=list, init=False, repr=False)
    _last_telemetry: TelemetryData | None = field(default=None, init=False, repr=False)
    _record_history: bool = field(default=True)

    def __post_init__(self) -> None:
        """Initialize timekeeping and history."""
        self._accumulator = StepAccumulator(dt=self.state.dt, max_substeps=self.max_substeps)
        if self._record_history:
            self._history = [self.state.copy()]

    @classmethod
    def from_launch_pad(
        cls,
        stages: Sequence[RocketStage] | None = None,
        config: SimConfig | None = None,
        dt: float = 1.0 / 60.0,
    ) -> "Simulator":
        """Create a simulator with the vehicle paused on the pad.

        Args:
            stages: Vehicle stages (defaults to the two-stage reference vehicle)
            config: Physics configuration
            dt: Physics timestep [s]
        """
        config = config or SimConfig()
        state = SimulationState.from_launch_pad(
            stages=stages,
            radius=config.gravity.radius,
            dt=dt,
        )
        return cls(state=state, config=config)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def step(self) -> TelemetryData:
        """Run one fixed tick."""
        self.state, telemetry = step(self.state, self.config)
        if self._record_history:
            self._history.append(self.state.copy())
            self._telemetry.append(telemetry)
        self._last_telemetry = telemetry
        return telemetry

    def run(self, duration: float) -> TelemetryData | None:
        """Run whole ticks covering ``duration`` seconds.

        Ticks run even while paused (observing only), so the tick count, not
        the mission clock, bounds the loop.

        Returns:
            Telemetry from the last tick, or None if no tick ran
        """
        n_steps = int(round(duration / self.state.dt))
        logger.info("Running %d ticks (%.2f s) from t=%.2f s", n_steps, duration, self.time)
        telemetry = None
        for _ in range(n_steps):
            telemetry = self.step()
        return telemetry

    def run_until(
        self,
        predicate: Callable[[TelemetryData], bool],
        max_time: float,
    ) -> TelemetryData | None:
        """Step until ``predicate(telemetry)`` holds.

        Args:
            predicate: Stop condition evaluated after every tick
            max_time: Tick budget expressed in seconds

        Returns:
            Telemetry of the tick that satisfied the predicate, or None if
            the budget ran out first
        """
        max_steps = int(round(max_time / self.state.dt))
        for _ in range(max_steps):
            telemetry = self.step()
            if predicate(telemetry):
                logger.info("Stop condition met at t=%.2f s", telemetry.time_s)
                return telemetry
        logger.info("Stop condition not met within %.1f s", max_time)
        return None

    def advance(self, elapsed: float) -> int:
        """Consume wall-clock time in fixed ticks.

        Args:
            elapsed: Real time since the previous call [s]

        Returns:
            Number of ticks run
        """
        self._accumulator.accrue(elapsed)
        n_steps = self._accumulator.consume()
        for _ in range(n_steps):
            self.step()
        return n_steps

    # -------------------------------------------------------------------------
    # Controls
    # -------------------------------------------------------------------------

    def set_throttle(self, value: float) -> None:
        self.state = controls.set_throttle(self.state, value)

    def set_pitch(self, degrees: float) -> None:
        self.state = controls.set_pitch(self.state, degrees)

    def nudge_pitch(self, delta_deg: float = controls.PITCH_NUDGE_DEG) -> None:
        self.state = controls.nudge_pitch(self.state, delta_deg)

    def stage(self) -> None:
        self.state = controls.stage(self.state)

    def toggle_pause(self) -> None:
        self.state = controls.toggle_pause(self.state)

    def set_autopilot(self, mode: AutopilotMode) -> None:
        self.state = controls.set_autopilot(self.state, mode)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def get_state(self) -> SimulationState:
        """Get the current state.

        Returns a copy to prevent external modification.
        """
        return self.state.copy()

    def get_history(self) -> list[SimulationState]:
        """Get recorded state history (initial state first)."""
        return self._history.copy()

    def get_telemetry(self) -> list[TelemetryData]:
        """Get recorded telemetry, one entry per tick."""
        return self._telemetry.copy()

    def clear_history(self) -> None:
        """Clear recorded history."""
        self._history = [self.state.copy()]
        self._telemetry = []

    @property
    def last_telemetry(self) -> TelemetryData | None:
        """Telemetry from the most recent tick."""
        return self._last_telemetry

    @property
    def time(self) -> float:
        """Current mission time [s]."""
        return self.state.time

    @property
    def altitude(self) -> float:
        """Current altitude [m]."""
        return self.state.radius - self.config.gravity.radius


# =============================================================================
# Results and Analysis
# =============================================================================


@typechecked
@dataclass
class SimulationResult:
    """Recorded run, one row per tick.

    ``states[i]`` is the state returned by the tick that produced
    ``telemetry[i]``.
    """
    states: list[SimulationState]
    telemetry: list[TelemetryData]

    def __post_init__(self) -> None:
        """Validate inputs."""
        if len(self.states) != len(self.telemetry):
            raise ValueError(
                f"states ({len(self.states)}) and telemetry ({len(self.telemetry)}) "
                "must have the same length"
            )

    @classmethod
    def from_simulator(cls, sim: Simulator) -> "SimulationResult":
        """Create result from simulator history."""
        return cls(states=sim.get_history()[1:], telemetry=sim.get_telemetry())

    def _column(self, name: str) -> NDArray[np.float64]:
        return np.array([getattr(t, name) for t in self.telemetry], dtype=np.float64)

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return self._column("time_s")

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return self._column("altitude_m")

    @property
    def speed(self) -> NDArray[np.float64]:
        """Speed history [m/s]."""
        return self._column("speed_mps")

    @property
    def mass(self) -> NDArray[np.float64]:
        """Mass history [kg]."""
        return self._column("mass_kg")

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 2)."""
        return np.array([s.position for s in self.states], dtype=np.float64).reshape(-1, 2)

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 2)."""
        return np.array([s.velocity for s in self.states], dtype=np.float64).reshape(-1, 2)

    def to_dataframe(self) -> pl.DataFrame:
        """Convert to Polars DataFrame, one column per telemetry field."""
        columns = {name: [getattr(t, name) for t in self.telemetry] for name in TelemetryData._fields}
        position = self.position
        velocity = self.velocity
        return pl.DataFrame({
            **columns,
            "x": position[:, 0],
            "y": position[:, 1],
            "vx": velocity[:, 0],
            "vy": velocity[:, 1],
        })
