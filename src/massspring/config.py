"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Single source: the clock, the history buffer and the widgets all agree on
   the same capacities, step sizes and ranges.
2. Tuning: visual scales and colours live in one place instead of being
   scattered through the drawing code.

Exports:
    HISTORY_CAPACITY (int): Maximum number of states kept for the charts.
    STEP_DELTA_S (float): Simulation time advanced by a single step.
    DEFAULT_*: Initial physical parameters.
"""
import math

# --- Application ---
VISIBLE_APP_NAME: str = "SHM Lab: Mass-Spring"

# --- Simulation core ---
HISTORY_CAPACITY: int = 200
STEP_DELTA_S: float = 0.05
DEFAULT_PLAYBACK_SPEED: float = 1.0

# Default frame interval of the host scheduler (~60 Hz)
DEFAULT_FRAME_INTERVAL_MS: int = 16

# --- Default physical parameters ---
DEFAULT_MASS: float = 2.0         # kg
DEFAULT_STIFFNESS: float = 50.0   # N/m
DEFAULT_AMPLITUDE: float = 1.5    # m
DEFAULT_PHASE: float = 0.0        # rad

# --- Control ranges: (min, max, step) ---
MASS_RANGE = (0.5, 10.0, 0.1)
STIFFNESS_RANGE = (10.0, 200.0, 5.0)
AMPLITUDE_RANGE = (0.5, 3.0, 0.1)
PHASE_RANGE = (-math.pi, math.pi, 0.05)
PLAYBACK_SPEED_RANGE = (0.1, 5.0, 0.1)

# --- Scene ---
SCALE_PX_PER_METER: float = 100.0
SCENE_WIDTH: int = 800
SCENE_HEIGHT: int = 500
WALL_X: float = 50.0
BLOCK_SIZE: float = 80.0
SPRING_SEGMENTS: int = 12
SPRING_AMPLITUDE_PX: float = 15.0
CIRCLE_CENTER_Y: float = 120.0

# Pixels per unit of each vector quantity
VELOCITY_SCALE: float = 30.0
ACCELERATION_SCALE: float = 10.0
FORCE_SCALE: float = 2.0
MIN_VECTOR_LENGTH_PX: float = 5.0

# Colour conventions used in physics textbooks
COLORS = {
    "position": "#3b82f6",      # blue
    "velocity": "#22c55e",      # green
    "acceleration": "#ef4444",  # red
    "force": "#f97316",         # orange
    "spring": "#64748b",        # grey
    "mass": "#1e293b",          # dark
    "circle_ghost": "#94a3b8",  # reference circle
}
