"""
Frame Scheduler
===============
The host per-frame hook that drives the simulation clock.

Why is this file needed?
------------------------
1. Abstraction: The driver only needs "call me once per frame with the
   current wall time"; tests substitute a manual scheduler.
2. Cancellation: Stopping is unconditional and idempotent, so a scheduled
   tick never outlives a pause or a window close.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, QElapsedTimer, Qt

from massspring import config

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Delivers monotonic wall timestamps (seconds) to a callback."""

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        """Register the tick callback; at most one registration is active."""

    @abstractmethod
    def stop(self) -> None:
        """Deregister the callback. Safe to call when not active."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        ...


class QtFrameScheduler(FrameScheduler):
    """
    QTimer-driven scheduler running on the GUI thread.

    The timer is parented to ``parent`` (usually the driver) so Qt destroys it
    together with its owner.
    """

    def __init__(
        self,
        interval_ms: int = config.DEFAULT_FRAME_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        self._callback: Optional[TickCallback] = None

        self._clock = QElapsedTimer()
        self._clock.start()

        self._timer = QTimer(parent)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def set_fps(self, fps: int) -> None:
        """Update timer interval based on FPS."""
        if fps > 0:
            self._timer.setInterval(max(1, 1000 // fps))

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        if not self._timer.isActive():
            self._timer.start()
            logger.debug(f"Frame timer started ({self._timer.interval()} ms)")

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            logger.debug("Frame timer stopped")
        self._callback = None

    def now(self) -> float:
        """Monotonic wall time in seconds."""
        return self._clock.nsecsElapsed() / 1e9

    def _on_timeout(self) -> None:
        # A timeout already queued when stop() ran must not reach the callback
        if self._callback is None:
            return
        self._callback(self.now())
