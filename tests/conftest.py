import os

# Widgets must be creatable on CI machines without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from massspring.controller.scheduler import FrameScheduler
from massspring.model.physics import PhysicalParameters


class ManualScheduler(FrameScheduler):
    """Scheduler whose ticks are fired explicitly by the test."""

    def __init__(self) -> None:
        self.callback = None
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, callback) -> None:
        self.start_calls += 1
        self.callback = callback

    def stop(self) -> None:
        self.stop_calls += 1
        self.callback = None

    def fire(self, wall_timestamp: float) -> None:
        if self.callback is not None:
            self.callback(wall_timestamp)


@pytest.fixture
def example_params() -> PhysicalParameters:
    # omega = sqrt(50 / 2) = 5 rad/s
    return PhysicalParameters(mass=2.0, stiffness=50.0, amplitude=1.5, phase=0.0)


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()
