"""
Kinematic Evaluator
===================
Closed-form kinematics of the undamped mass-spring oscillator.

Why is this file needed?
------------------------
1. Physics: It implements x(t) = A cos(wt + phi) and its derivatives.
2. Purity: Every function here is stateless; the same inputs always give the
   same output, so the clock can re-evaluate freely.

Classes:
    PhysicalParameters: mass, stiffness, amplitude, phase.
    InstantaneousState: one evaluated snapshot of the motion.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from massspring import config
from massspring.exceptions import InvalidParameterError


@dataclass(frozen=True)
class PhysicalParameters:
    mass: float = config.DEFAULT_MASS            # kg
    stiffness: float = config.DEFAULT_STIFFNESS  # N/m
    amplitude: float = config.DEFAULT_AMPLITUDE  # m
    phase: float = config.DEFAULT_PHASE          # rad

    def validate(self) -> None:
        """Raise InvalidParameterError if any field is outside its domain."""
        for name in ("mass", "stiffness", "amplitude", "phase"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidParameterError(name, value, "must be a real number")
            if not math.isfinite(value):
                raise InvalidParameterError(name, value, "must be finite")
        if self.mass <= 0:
            raise InvalidParameterError("mass", self.mass, "must be > 0")
        if self.stiffness <= 0:
            raise InvalidParameterError("stiffness", self.stiffness, "must be > 0")
        if self.amplitude < 0:
            raise InvalidParameterError("amplitude", self.amplitude, "must be >= 0")


@dataclass(frozen=True)
class InstantaneousState:
    sim_time: float         # s
    position: float         # m
    velocity: float         # m/s
    acceleration: float     # m/s^2
    restoring_force: float  # N


def angular_frequency(params: PhysicalParameters) -> float:
    """omega = sqrt(k / m) in rad/s."""
    if params.mass <= 0:
        raise InvalidParameterError("mass", params.mass, "must be > 0")
    if params.stiffness <= 0:
        raise InvalidParameterError("stiffness", params.stiffness, "must be > 0")
    return math.sqrt(params.stiffness / params.mass)


def period(params: PhysicalParameters) -> float:
    """T = 2 pi sqrt(m / k) in seconds."""
    return 2.0 * math.pi / angular_frequency(params)


def evaluate(sim_time: float, params: PhysicalParameters) -> InstantaneousState:
    """
    Evaluate the oscillator at the given simulation time.

    Args:
        sim_time: Simulation time in seconds (any finite value).
        params: Physical parameters; mass and stiffness must be positive.

    Returns:
        A freshly constructed InstantaneousState.

    Raises:
        InvalidParameterError: If sim_time is not finite or the parameters
            would make omega undefined.
    """
    if not math.isfinite(sim_time):
        raise InvalidParameterError("sim_time", sim_time, "must be finite")
    omega = angular_frequency(params)

    theta = omega * sim_time + params.phase
    x = params.amplitude * math.cos(theta)
    v = -omega * params.amplitude * math.sin(theta)
    a = -(omega * omega) * x
    f = -params.stiffness * x

    return InstantaneousState(
        sim_time=sim_time,
        position=x,
        velocity=v,
        acceleration=a,
        restoring_force=f,
    )


# --- Energy ---

def kinetic_energy(state: InstantaneousState, params: PhysicalParameters) -> float:
    return 0.5 * params.mass * state.velocity ** 2


def potential_energy(state: InstantaneousState, params: PhysicalParameters) -> float:
    return 0.5 * params.stiffness * state.position ** 2


def total_energy(params: PhysicalParameters) -> float:
    """Mechanical energy, constant for the undamped oscillator."""
    return 0.5 * params.stiffness * params.amplitude ** 2


# --- Circular-motion reference ---

def reference_angle(sim_time: float, params: PhysicalParameters) -> float:
    """Angle of the uniform circular motion whose projection is x(t)."""
    return angular_frequency(params) * sim_time + params.phase


def reference_point(sim_time: float, params: PhysicalParameters) -> tuple[float, float]:
    """
    Point on the reference circle (radius = amplitude) in metres.

    The x coordinate equals the oscillator position at the same time.
    """
    theta = reference_angle(sim_time, params)
    return params.amplitude * math.cos(theta), params.amplitude * math.sin(theta)
