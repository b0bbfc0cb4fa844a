"""
Simulation Driver
=================
Connects the SimulationClock, the ParameterStore and the frame scheduler.

Why is this file needed?
------------------------
1. Scheduling: The tick callback is registered exactly while the clock is
   running and deregistered on pause, step, reset and shutdown.
2. Signals: Views never poll; they receive every new state through
   ``frame_ready`` and every transport change through ``running_changed``.

Classes:
    SimulationDriver: The transport controller used by the main window.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from massspring import config
from massspring.controller.scheduler import FrameScheduler, QtFrameScheduler
from massspring.model import physics
from massspring.model.clock import SimulationClock
from massspring.model.history import HistoryBuffer
from massspring.model.physics import InstantaneousState, PhysicalParameters
from massspring.model.state import ParameterStore

logger = logging.getLogger(__name__)


class SimulationDriver(QObject):
    # Emitted with the InstantaneousState to display
    frame_ready = Signal(object)
    running_changed = Signal(bool)
    parameters_changed = Signal(object)

    def __init__(
        self,
        store: ParameterStore,
        scheduler: Optional[FrameScheduler] = None,
        history: Optional[HistoryBuffer] = None,
        playback_speed: float = config.DEFAULT_PLAYBACK_SPEED,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.scheduler = scheduler if scheduler is not None else QtFrameScheduler(parent=self)
        self.clock = SimulationClock(
            params_provider=lambda: self.store.params,
            history=history,
            playback_speed=playback_speed,
        )
        self._is_shut_down = False

        self.store.parameters_changed.connect(self._on_parameters_changed)

    # --- Read access ---

    @property
    def history(self) -> HistoryBuffer:
        return self.clock.history

    @property
    def is_running(self) -> bool:
        return self.clock.is_running

    @property
    def sim_time(self) -> float:
        return self.clock.sim_time

    @property
    def playback_speed(self) -> float:
        return self.clock.playback_speed

    def current_state(self) -> InstantaneousState:
        return self.clock.current_state()

    def history_snapshot(self) -> tuple[InstantaneousState, ...]:
        return self.clock.history.snapshot()

    def angular_frequency(self) -> float:
        return physics.angular_frequency(self.store.params)

    def period(self) -> float:
        return physics.period(self.store.params)

    # --- Transport ---

    def play(self) -> None:
        if self._is_shut_down:
            logger.warning("play() ignored: driver has been shut down")
            return
        if self.clock.play():
            self.scheduler.start(self.tick)
            logger.info(f"Playing from t={self.clock.sim_time:.2f}s")
            self.running_changed.emit(True)

    def pause(self) -> None:
        # Unconditional: a pending registration is cancelled even if the
        # clock already considers itself stopped
        self.scheduler.stop()
        if self.clock.pause():
            logger.info(f"Paused at t={self.clock.sim_time:.2f}s")
            self.running_changed.emit(False)

    def toggle_play(self) -> None:
        if self.clock.is_running:
            self.pause()
        else:
            self.play()

    def step(self, fixed_delta: float = config.STEP_DELTA_S) -> InstantaneousState:
        was_running = self.clock.is_running
        # The clock validates the delta before leaving the Running state
        new_state = self.clock.step(fixed_delta)
        self.scheduler.stop()
        if was_running:
            self.running_changed.emit(False)
        logger.info(f"Stepped to t={new_state.sim_time:.2f}s")
        self.frame_ready.emit(new_state)
        return new_state

    def reset(self) -> None:
        was_running = self.clock.is_running
        self.scheduler.stop()
        self.clock.reset()
        if was_running:
            self.running_changed.emit(False)
        logger.info("Simulation reset")
        self.frame_ready.emit(self.clock.current_state())

    def tick(self, wall_timestamp: float) -> Optional[InstantaneousState]:
        """Scheduler callback; emits ``frame_ready`` when time advanced."""
        if self._is_shut_down:
            return None
        new_state = self.clock.tick(wall_timestamp)
        if new_state is not None:
            self.frame_ready.emit(new_state)
        return new_state

    def set_playback_speed(self, value: float) -> None:
        self.clock.set_playback_speed(value)
        logger.info(f"Playback speed set to {self.clock.playback_speed:g}x")

    def set_parameters(self, **changes: float) -> PhysicalParameters:
        """Partial update through the store; see ParameterStore.update."""
        return self.store.update(**changes)

    def shutdown(self) -> None:
        """Cancel any scheduled tick. Idempotent, safe while running."""
        self.scheduler.stop()
        if self._is_shut_down:
            return
        self._is_shut_down = True
        if self.clock.pause():
            self.running_changed.emit(False)
        try:
            self.store.parameters_changed.disconnect(self._on_parameters_changed)
        except (RuntimeError, TypeError):
            # Already disconnected or the store has been destroyed
            pass
        logger.info("Simulation driver shut down")

    # --- Slots ---

    def _on_parameters_changed(self, params: PhysicalParameters) -> None:
        # No reset, no interpolation: the new formula applies at the current
        # sim_time and to every state appended from now on
        self.parameters_changed.emit(params)
        self.frame_ready.emit(self.clock.current_state())
