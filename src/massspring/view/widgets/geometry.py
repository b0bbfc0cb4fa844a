"""
Scene geometry helpers.

Pure functions (numpy only) that turn physical quantities into scene
coordinates. Kept separate from the QGraphics code so they can be tested
without a display.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from massspring import config

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class ArrowGeometry:
    start: tuple[float, float]
    end: tuple[float, float]
    head: npt.NDArray[np.float64]  # (3, 2) triangle, tip first
    label_pos: tuple[float, float]


def meters_to_px(value: float, scale: float = config.SCALE_PX_PER_METER) -> float:
    return value * scale


def scene_center_y(show_circular_motion: bool, height: float = config.SCENE_HEIGHT) -> float:
    """Move the oscillator down when the reference circle is drawn above it."""
    return height * 0.65 if show_circular_motion else height / 2


def block_center_x(position: float, center_x: float = config.SCENE_WIDTH / 2) -> float:
    return center_x + meters_to_px(position)


def spring_points(
    start_x: float,
    end_x: float,
    center_y: float,
    segments: int = config.SPRING_SEGMENTS,
    amplitude: float = config.SPRING_AMPLITUDE_PX,
) -> npt.NDArray[np.float64]:
    """
    Zig-zag polyline of the spring from the wall to the block.

    Each segment contributes a mid point (offset up, none, down, none, ...)
    and an end point on the axis.

    Returns:
        Array of shape (2 * segments + 1, 2).
    """
    if segments < 1:
        raise ValueError("segments must be >= 1")
    seg_len = (end_x - start_x) / segments

    i = np.arange(1, segments + 1)
    ends_x = start_x + i * seg_len
    mids_x = ends_x - seg_len / 2
    # i odd: alternating -A / +A ; i even: on the axis
    offsets = np.where(i % 2 == 0, 0.0, np.where(i % 4 == 1, -amplitude, amplitude))

    pts = np.empty((2 * segments + 1, 2), dtype=np.float64)
    pts[0] = (start_x, center_y)
    pts[1::2, 0] = mids_x
    pts[1::2, 1] = center_y + offsets
    pts[2::2, 0] = ends_x
    pts[2::2, 1] = center_y
    return pts


def vector_arrow(
    x: float,
    y: float,
    length: float,
    arrow_size: float = 6.0,
    min_length: float = config.MIN_VECTOR_LENGTH_PX,
) -> Optional[ArrowGeometry]:
    """Horizontal arrow of signed pixel length, or None if too short to draw."""
    if abs(length) < min_length:
        return None
    end_x = x + length
    direction = 1.0 if length > 0 else -1.0
    head = np.array([
        (end_x, y),
        (end_x - arrow_size * direction, y - arrow_size),
        (end_x - arrow_size * direction, y + arrow_size),
    ], dtype=np.float64)
    return ArrowGeometry(
        start=(x, y),
        end=(end_x, y),
        head=head,
        label_pos=(x + length / 2, y - 8),
    )


def circle_point(
    center_x: float,
    center_y: float,
    radius_px: float,
    theta: float,
) -> tuple[float, float]:
    """Point on the reference circle; scene y grows downwards."""
    return center_x + radius_px * math.cos(theta), center_y - radius_px * math.sin(theta)
