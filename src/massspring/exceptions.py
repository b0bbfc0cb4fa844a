"""
Exception hierarchy for the simulator.

Only parameter validation can fail: the system does no I/O. Non-monotonic
wall-clock timestamps are clamped by the clock and never raised.
"""


class MassSpringError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameterError(MassSpringError, ValueError):
    """
    A physical parameter or clock setting is out of its valid domain.

    Raised at the write boundary (ParameterStore, SimulationClock) so that the
    previous valid value is kept.
    """

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{name}': {value!r} ({reason})")
