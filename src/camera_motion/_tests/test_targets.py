from __future__ import annotations

import numpy as np
import pytest

from camera_motion.models import EnvContext, SceneBounds, SceneContext, SceneFeature, vector
from camera_motion.targets import resolve_target_position

CURRENT = vector(0.3, 0.2, 0.1)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("object_center", [0, 0, 0]),
        ("object_top_center", [0, 1, 0]),
        ("object_bottom_center", [0, -1, 0]),
        ("object_left_center", [-1, 0, 0]),
        ("object_right_center", [1, 0, 0]),
        ("object_front_center", [0, 0, 1]),
        ("object_back_center", [0, 0, -1]),
        ("object_front_left_corner", [-1, 0, 1]),
        ("object_back_right_corner", [1, 0, -1]),
        ("center", [0, 0, 0]),
        ("Object_Center", [0, 0, 0]),
    ],
)
def test_landmarks(scene, env, name, expected):
    np.testing.assert_allclose(resolve_target_position(name, scene, env, CURRENT), expected)


def test_current_target(scene, env):
    np.testing.assert_allclose(resolve_target_position("current_target", scene, env, CURRENT), CURRENT)


def test_landmarks_follow_vertical_adjustment(scene):
    shifted = resolve_target_position("object_top_center", scene, EnvContext(user_vertical_adjustment=0.5), CURRENT)
    np.testing.assert_allclose(shifted, [0, 1.5, 0])


def test_explicit_center_is_used():
    bounds = SceneBounds(vector(-1, -1, -1), vector(1, 1, 1), center=vector(0, 0.5, 0))
    point = resolve_target_position("object_center", SceneContext(bounds=bounds), EnvContext(), CURRENT)
    np.testing.assert_allclose(point, [0, 0.5, 0])


def test_features_by_id_then_description(unit_bounds, env):
    scene = SceneContext(
        bounds=unit_bounds,
        features=(
            SceneFeature("door", vector(3, 0, 3), "Front Door"),
            SceneFeature("window", vector(-3, 1, 0), "door"),
        ),
    )
    np.testing.assert_allclose(resolve_target_position("door", scene, env, CURRENT), [3, 0, 3])
    np.testing.assert_allclose(resolve_target_position("front door", scene, env, CURRENT), [3, 0, 3])
    np.testing.assert_allclose(resolve_target_position("window", scene, env, CURRENT), [-3, 1, 0])


def test_unresolved_names(scene, env):
    assert resolve_target_position("chimney", scene, env, CURRENT) is None
    assert resolve_target_position(None, scene, env, CURRENT) is None
    assert resolve_target_position("object_center", SceneContext(), env, CURRENT) is None


def test_features_win_over_short_aliases(unit_bounds, env):
    scene = SceneContext(
        bounds=unit_bounds,
        features=(
            SceneFeature("top", vector(0, 4, 0), "roof hatch"),
            SceneFeature("porch", vector(0, 0, 3), "Front"),
        ),
    )
    np.testing.assert_allclose(resolve_target_position("top", scene, env, CURRENT), [0, 4, 0])
    np.testing.assert_allclose(resolve_target_position("front", scene, env, CURRENT), [0, 0, 3])
    np.testing.assert_allclose(resolve_target_position("left", scene, env, CURRENT), [-1, 0, 0])
    np.testing.assert_allclose(resolve_target_position("object_top_center", scene, env, CURRENT), [0, 1, 0])
