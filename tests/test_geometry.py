import math

import numpy as np
import pytest

from massspring import config
from massspring.view.widgets import geometry


def test_spring_points_shape_and_ends():
    pts = geometry.spring_points(50.0, 290.0, 250.0, segments=12, amplitude=15.0)

    assert pts.shape == (25, 2)
    assert tuple(pts[0]) == (50.0, 250.0)
    assert tuple(pts[-1]) == pytest.approx((290.0, 250.0))


def test_spring_points_zigzag_pattern():
    pts = geometry.spring_points(0.0, 120.0, 100.0, segments=4, amplitude=10.0)

    mids = pts[1::2]
    assert list(mids[:, 0]) == pytest.approx([15.0, 45.0, 75.0, 105.0])
    assert list(mids[:, 1]) == pytest.approx([90.0, 100.0, 110.0, 100.0])
    assert np.all(pts[2::2, 1] == 100.0)


def test_spring_points_invalid_segments():
    with pytest.raises(ValueError):
        geometry.spring_points(0.0, 10.0, 0.0, segments=0)


def test_short_vector_is_hidden():
    assert geometry.vector_arrow(100.0, 50.0, 4.9) is None
    assert geometry.vector_arrow(100.0, 50.0, -4.9) is None


def test_vector_arrow_direction():
    right = geometry.vector_arrow(100.0, 50.0, 40.0, arrow_size=6.0)
    left = geometry.vector_arrow(100.0, 50.0, -40.0, arrow_size=6.0)

    assert right.end == (140.0, 50.0)
    assert tuple(right.head[0]) == (140.0, 50.0)
    assert right.head[1, 0] == 134.0
    assert left.end == (60.0, 50.0)
    assert left.head[1, 0] == 66.0
    assert right.label_pos == (120.0, 42.0)


def test_scene_center_and_block():
    assert geometry.scene_center_y(False, 500) == 250
    assert geometry.scene_center_y(True, 500) == pytest.approx(325)
    assert geometry.block_center_x(1.5, 400.0) == 400.0 + 1.5 * config.SCALE_PX_PER_METER


def test_circle_point_y_axis_points_up():
    x, y = geometry.circle_point(400.0, 120.0, 100.0, math.pi / 2)
    assert x == pytest.approx(400.0)
    assert y == pytest.approx(20.0)
