from __future__ import annotations

import math

import numpy as np
import pytest

from camera_motion.geometry import (
    camera_axes,
    clamp_position_with_raycast,
    dynamic_offset,
    horizontal_right,
    ray_box_distance,
    rotate_vector,
)
from camera_motion.models import SceneBounds, vector

UNIT_OFFSET = 0.05 * math.sqrt(12.0)


def test_camera_axes_for_forward_view():
    right, up = camera_axes(np.array([0.0, 0.0, -1.0]))
    np.testing.assert_allclose(right, [-1.0, 0.0, 0.0])
    np.testing.assert_allclose(up, [0.0, -1.0, 0.0])


def test_camera_axes_fall_back_to_world_x_when_looking_down():
    right, up = camera_axes(np.array([0.0, -1.0, 0.0]))
    np.testing.assert_allclose(right, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(up, [0.0, 0.0, -1.0])


def test_horizontal_right_points_to_screen_right():
    np.testing.assert_allclose(horizontal_right(np.array([0.0, 0.0, -1.0])), [1.0, 0.0, 0.0])
    np.testing.assert_allclose(horizontal_right(np.array([0.0, -3.0, 0.0])), [-1.0, 0.0, 0.0])
    view = np.array([2.0, -1.0, -3.0])
    np.testing.assert_allclose(horizontal_right(view), -camera_axes(view)[0])


def test_rotate_vector_uses_right_hand_rule():
    rotated = rotate_vector(np.array([1.0, 0.0, 0.0]), np.array([0.0, 2.0, 0.0]), math.pi / 2)
    np.testing.assert_allclose(rotated, [0.0, 0.0, -1.0], atol=1e-12)


def test_rotate_vector_degenerate_axis_is_identity():
    np.testing.assert_allclose(rotate_vector(np.array([1.0, 2.0, 3.0]), np.zeros(3), 1.0), [1.0, 2.0, 3.0])


def test_ray_box_distance_hit_and_miss(unit_bounds):
    hit = ray_box_distance(np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0, -1.0]), unit_bounds.minimum, unit_bounds.maximum)
    assert hit == pytest.approx(4.0)
    miss = ray_box_distance(np.array([5.0, 5.0, 5.0]), np.array([0.0, 0.0, -1.0]), unit_bounds.minimum, unit_bounds.maximum)
    assert miss is None
    behind = ray_box_distance(np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0, 1.0]), unit_bounds.minimum, unit_bounds.maximum)
    assert behind is None


def test_dynamic_offset_is_bounded():
    assert dynamic_offset(SceneBounds(vector(0, 0, 0), vector(0.1, 0.1, 0.1))) == pytest.approx(0.1)
    assert dynamic_offset(SceneBounds(vector(-50, -50, -50), vector(50, 50, 50))) == pytest.approx(0.5)


def test_clamp_stops_short_of_the_box(unit_bounds):
    clamped = clamp_position_with_raycast(vector(0, 0, 5), vector(0, 0, -5), unit_bounds)
    np.testing.assert_allclose(clamped, [0.0, 0.0, 1.0 + UNIT_OFFSET])
    assert not unit_bounds.contains(clamped)


def test_clamp_pushes_end_point_out_through_nearest_face(unit_bounds):
    clamped = clamp_position_with_raycast(vector(0, 0, 0.9), vector(0, 0, 0.8), unit_bounds)
    np.testing.assert_allclose(clamped, [0.0, 0.0, 1.0 + UNIT_OFFSET])


def test_clamp_leaves_clear_paths_alone(unit_bounds):
    end = clamp_position_with_raycast(vector(0, 0, 5), vector(3, 0, 5), unit_bounds)
    np.testing.assert_allclose(end, [3.0, 0.0, 5.0])
    np.testing.assert_allclose(clamp_position_with_raycast(vector(0, 0, 5), vector(0, 0, -5), None), [0.0, 0.0, -5.0])


def test_clamp_respects_vertical_adjustment(unit_bounds):
    end = clamp_position_with_raycast(vector(0, 0, 5), vector(0, 0, -5), unit_bounds, vertical_adjustment=2.0)
    np.testing.assert_allclose(end, [0.0, 0.0, -5.0])
