from __future__ import annotations

import math

import numpy as np
import pytest

from camera_motion.errors import PlanParsingError
from camera_motion.models import (
    CameraCommand,
    CameraState,
    EnvContext,
    MotionPlan,
    MotionStep,
    SceneBounds,
    SceneContext,
    as_vector,
    vector,
)


def test_as_vector_accepts_mappings_and_is_read_only():
    v = as_vector({"x": 1, "y": 2, "z": 3})
    np.testing.assert_allclose(v, [1, 2, 3])
    with pytest.raises(ValueError):
        v[0] = 5.0


@pytest.mark.parametrize("raw", [[1, 2], {"x": 1, "y": 2}, "abc", [1, "b", 3]])
def test_as_vector_rejects_malformed(raw):
    with pytest.raises(PlanParsingError):
        as_vector(raw)


def test_scene_bounds_geometry():
    bounds = SceneBounds(vector(1, 1, 1), vector(-1, -1, -1))
    np.testing.assert_allclose(bounds.minimum, [-1, -1, -1])
    np.testing.assert_allclose(bounds.center, [0, 0, 0])
    assert bounds.diagonal == pytest.approx(math.sqrt(12.0))
    shifted = bounds.translated(2.0)
    np.testing.assert_allclose(shifted.maximum, [1, 3, 1])
    np.testing.assert_allclose(shifted.center, [0, 2, 0])
    assert bounds.contains(vector(1, 0, 0))
    assert not bounds.contains(vector(1, 0, 0), strict=True)


def test_motion_plan_from_dict_accepts_both_key_styles():
    plan = MotionPlan.from_dict(
        {
            "steps": [
                {"type": " Orbit ", "parameters": {"direction": "left", "angle": 90}, "duration_ratio": 0.5},
                {"type": "static", "durationRatio": 0.5},
            ],
            "metadata": {"requestedDuration": 4, "default_easing": "linear"},
        }
    )
    assert [step.type for step in plan.steps] == ["orbit", "static"]
    assert plan.requested_duration == 4.0
    assert plan.default_easing == "linear"
    assert plan.steps[1].duration_ratio == 0.5
    with pytest.raises(TypeError):
        plan.steps[0].parameters["angle"] = 10


@pytest.mark.parametrize(
    "payload",
    [
        {"steps": "orbit"},
        {"steps": [{"parameters": {}}]},
        {"steps": [{"type": "zoom", "parameters": []}]},
        {"steps": [{"type": "zoom", "duration_ratio": "half"}]},
        {"steps": [], "metadata": {"requested_duration": "long"}},
    ],
)
def test_motion_plan_rejects_malformed(payload):
    with pytest.raises(PlanParsingError):
        MotionPlan.from_dict(payload)


def test_scene_and_env_from_dict():
    scene = SceneContext.from_dict(
        {
            "spatial": {"bounds": {"min": [-1, -1, -1], "max": [1, 1, 1]}},
            "features": [{"id": "door", "position": {"x": 3, "y": 0, "z": 3}, "description": "front door"}],
        }
    )
    assert scene.object_size == pytest.approx(math.sqrt(12.0))
    assert scene.features[0].id == "door"
    env = EnvContext.from_dict(
        {"cameraConstraints": {"minDistance": 1, "maxDistance": 9, "minHeight": 0}, "userVerticalAdjustment": 0.25}
    )
    assert env.camera_constraints.max_height == math.inf
    assert env.camera_constraints.min_distance == 1.0
    assert env.user_vertical_adjustment == 0.25
    assert SceneContext.from_dict(None).bounds is None


def test_inverted_constraints_are_rejected():
    with pytest.raises(PlanParsingError):
        EnvContext.from_dict({"cameraConstraints": {"minDistance": 5, "maxDistance": 1}})


def test_camera_state_and_command_serialise():
    state = CameraState.from_dict({"position": [0, 0, 5], "target": {"x": 0, "y": 0, "z": 0}})
    assert state.distance == pytest.approx(5.0)
    command = CameraCommand(state.position, state.target, 1, "linear")
    assert command.to_dict() == {
        "position": [0.0, 0.0, 5.0],
        "target": [0.0, 0.0, 0.0],
        "duration": 1.0,
        "easing": "linear",
    }
    with pytest.raises(PlanParsingError):
        CameraState.from_dict({"position": [0, 0, 5]})
    assert MotionStep("static", {}).duration_ratio == 0.0


def test_motion_plan_requires_a_step_list():
    with pytest.raises(PlanParsingError):
        MotionPlan(None, 2.0)
