"""
History Buffer
==============
Bounded rolling window of evaluated states, consumed by the charts.

Why is this file needed?
------------------------
Long play sessions would otherwise grow memory without bound. A deque with
``maxlen`` evicts the oldest entry on every append past capacity, so there is
no grow-then-slice reallocation.
"""
from __future__ import annotations

from collections import deque
from typing import Iterator, Optional, TYPE_CHECKING

import numpy as np

from massspring import config
from massspring.model.physics import InstantaneousState

if TYPE_CHECKING:
    import numpy.typing as npt


class HistoryBuffer:
    def __init__(self, capacity: int = config.HISTORY_CAPACITY) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._entries: deque[InstantaneousState] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[InstantaneousState]:
        return iter(self.snapshot())

    def append(self, state: InstantaneousState) -> None:
        """Add a state at the tail; the oldest entry is dropped past capacity."""
        self._entries.append(state)

    def clear(self) -> None:
        self._entries.clear()

    def latest(self) -> Optional[InstantaneousState]:
        return self._entries[-1] if self._entries else None

    def snapshot(self) -> tuple[InstantaneousState, ...]:
        """Read-only copy of the entries, oldest first."""
        return tuple(self._entries)

    def as_arrays(self) -> dict[str, npt.NDArray[np.float64]]:
        """
        Column arrays for plotting.

        Returns:
            Dict with keys 't', 'x', 'v', 'a', 'f', each a float64 array of
            length len(self).
        """
        entries = self.snapshot()
        table = np.array(
            [(s.sim_time, s.position, s.velocity, s.acceleration, s.restoring_force) for s in entries],
            dtype=np.float64,
        ).reshape(len(entries), 5)
        return {
            "t": table[:, 0],
            "x": table[:, 1],
            "v": table[:, 2],
            "a": table[:, 3],
            "f": table[:, 4],
        }
