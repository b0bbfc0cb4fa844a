"""
Simulation Clock
================
Converts wall-clock time into simulation time and records the evaluated
states.

Why is this file needed?
------------------------
1. Time-Stepping: It owns the simulation time and advances it either from
   measured wall-clock deltas (tick) or by a fixed amount (step).
2. Discipline: It guarantees that sim_time never goes backwards (except on
   reset), that the first tick after resuming never produces a huge delta,
   and that the history only ever receives forward-advancing states.

Note: This module is pure Python and does NOT import PySide6. The Qt timer
lives in massspring.controller.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from massspring import config
from massspring.exceptions import InvalidParameterError
from massspring.model.history import HistoryBuffer
from massspring.model.physics import InstantaneousState, PhysicalParameters, evaluate

logger = logging.getLogger(__name__)


@dataclass
class ClockState:
    sim_time: float = 0.0
    is_running: bool = False
    playback_speed: float = config.DEFAULT_PLAYBACK_SPEED
    # Only set while running; the next tick measures its delta from here
    last_wall_timestamp: Optional[float] = None


class SimulationClock:
    """
    Two-state machine (Stopped / Running) driving the kinematic evaluator.

    The parameters are read through ``params_provider`` at the moment of each
    evaluation, so a parameter change takes effect on the next tick without
    touching the clock or the recorded history.
    """

    def __init__(
        self,
        params_provider: Callable[[], PhysicalParameters],
        history: Optional[HistoryBuffer] = None,
        playback_speed: float = config.DEFAULT_PLAYBACK_SPEED,
    ) -> None:
        self._params_provider = params_provider
        self.history = history if history is not None else HistoryBuffer()
        self.state = ClockState()
        self.set_playback_speed(playback_speed)

    # --- Read access ---

    @property
    def sim_time(self) -> float:
        return self.state.sim_time

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def playback_speed(self) -> float:
        return self.state.playback_speed

    def current_state(self) -> InstantaneousState:
        """Evaluate at the current sim_time with the latest parameters."""
        return evaluate(self.state.sim_time, self._params_provider())

    # --- Transitions ---

    def play(self) -> bool:
        """Stopped -> Running. Returns False if already running."""
        if self.state.is_running:
            return False
        self.state.is_running = True
        self.state.last_wall_timestamp = None
        logger.debug(f"Clock running from t={self.state.sim_time:.3f}s")
        return True

    def pause(self) -> bool:
        """Running -> Stopped. Returns False if already stopped."""
        if not self.state.is_running:
            return False
        self.state.is_running = False
        self.state.last_wall_timestamp = None
        logger.debug(f"Clock paused at t={self.state.sim_time:.3f}s")
        return True

    def toggle(self) -> bool:
        """Switch between running and stopped. Returns the new running flag."""
        if self.state.is_running:
            self.pause()
        else:
            self.play()
        return self.state.is_running

    def reset(self) -> None:
        """Any state -> Stopped, sim_time = 0, empty history."""
        self.state.is_running = False
        self.state.last_wall_timestamp = None
        self.state.sim_time = 0.0
        self.history.clear()
        logger.debug("Clock reset")

    def step(self, fixed_delta: float = config.STEP_DELTA_S) -> InstantaneousState:
        """
        Advance by exactly ``fixed_delta`` seconds, independent of wall time.

        Forces the Stopped state first. The new state is appended to the
        history and returned.
        """
        if not math.isfinite(fixed_delta) or fixed_delta <= 0:
            raise InvalidParameterError("fixed_delta", fixed_delta, "must be finite and > 0")
        self.pause()
        return self._advance(fixed_delta)

    def tick(self, wall_timestamp: float) -> Optional[InstantaneousState]:
        """
        Host frame callback.

        Args:
            wall_timestamp: Monotonic wall-clock time in seconds.

        Returns:
            The newly appended state, or None if time did not advance (clock
            stopped, first frame after resuming, or zero elapsed time).

        Raises:
            InvalidParameterError: If wall_timestamp is not finite. The clock
                state is left unchanged.
        """
        if not self.state.is_running:
            return None
        if not math.isfinite(wall_timestamp):
            raise InvalidParameterError("wall_timestamp", wall_timestamp, "must be finite")

        last = self.state.last_wall_timestamp
        self.state.last_wall_timestamp = wall_timestamp
        if last is None:
            return None

        delta_wall = wall_timestamp - last
        if delta_wall < 0:
            # Non-monotonic timestamp source: clamp, do not surface
            logger.debug(f"Clamped negative wall delta {delta_wall:.6f}s to 0")
            delta_wall = 0.0
        if delta_wall == 0:
            return None

        return self._advance(delta_wall * self.state.playback_speed)

    def set_playback_speed(self, value: float) -> None:
        """Scale applied to future wall deltas; recorded history is untouched."""
        if isinstance(value, bool) or not isinstance(value, (int, float)) \
                or not math.isfinite(value) or value <= 0:
            raise InvalidParameterError("playback_speed", value, "must be finite and > 0")
        self.state.playback_speed = float(value)

    # --- Internals ---

    def _advance(self, delta_sim: float) -> InstantaneousState:
        # Evaluate first: a failed evaluation leaves sim_time untouched
        new_time = self.state.sim_time + delta_sim
        new_state = evaluate(new_time, self._params_provider())
        self.state.sim_time = new_time
        self.history.append(new_state)
        return new_state
