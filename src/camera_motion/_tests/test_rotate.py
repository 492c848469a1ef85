from __future__ import annotations

import math

import numpy as np
import pytest

from camera_motion.config import InterpreterConfig
from camera_motion.errors import StepParameterError, UnresolvedTargetError
from camera_motion.handlers import StepContext
from camera_motion.handlers.rotate import handle_orbit, handle_pan, handle_rotate, handle_tilt
from camera_motion.models import MotionStep, SceneContext


def _step(kind: str, **parameters) -> MotionStep:
    return MotionStep(kind, parameters, 1.0)


def test_orbit_left_quarter_turn(state, scene, env, ctx):
    result = handle_orbit(_step("orbit", direction="left", angle=90, axis="y"), state, scene, env, ctx)
    assert len(result.commands) == 46
    first = result.commands[0]
    assert first.duration == 0.0
    np.testing.assert_allclose(first.target, [0, 0, 0])
    np.testing.assert_allclose(result.state.position, [-5, 0, 0], atol=1e-9)
    np.testing.assert_allclose(result.state.target, [0, 0, 0])
    assert sum(c.duration for c in result.commands) == pytest.approx(2.0)
    assert all(c.easing == "linear" for c in result.commands[1:])


def test_orbit_right_and_counter_clockwise_are_positive(state, scene, env, ctx):
    right = handle_orbit(_step("orbit", direction="right", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(right.state.position, [5, 0, 0], atol=1e-9)
    ccw = handle_orbit(_step("orbit", direction="counter-clockwise", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(ccw.state.position, right.state.position, atol=1e-9)


def test_orbit_full_circle_closes(state, scene, env, ctx):
    result = handle_orbit(_step("orbit", direction="clockwise", angle=360), state, scene, env, ctx)
    np.testing.assert_allclose(result.state.position, state.position, atol=1e-6)
    radii = [np.linalg.norm(c.position) for c in result.commands]
    assert radii == pytest.approx([5.0] * len(radii))


def test_orbit_up_raises_camera(state, scene, env, ctx):
    result = handle_orbit(_step("orbit", direction="up", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(result.state.position, [0, 5, 0], atol=1e-9)


def test_orbit_segment_size_follows_config(state, scene, env):
    ctx = StepContext(duration=3.0, config=InterpreterConfig(orbit_step_degrees=45.0))
    result = handle_orbit(_step("orbit", direction="left", angle=90), state, scene, env, ctx)
    assert len(result.commands) == 3
    assert [c.duration for c in result.commands] == pytest.approx([0.0, 1.5, 1.5])


def test_orbit_radius_factor(state, scene, env, ctx):
    result = handle_orbit(_step("orbit", direction="left", angle=90, radius_factor=2.0), state, scene, env, ctx)
    np.testing.assert_allclose(result.state.position, [-10, 0, 0], atol=1e-9)


def test_orbit_center_fallbacks(state, scene, env, ctx):
    result = handle_orbit(_step("orbit", direction="left", angle=90, target="chimney"), state, scene, env, ctx)
    np.testing.assert_allclose(result.state.target, [0, 0, 0])
    assert len(ctx.diagnostics.by_severity("warning")) == 1
    with pytest.raises(UnresolvedTargetError):
        handle_orbit(_step("orbit", direction="left", angle=90), state, SceneContext(), env, ctx)


def test_orbit_parameter_errors(state, scene, env, ctx):
    with pytest.raises(StepParameterError):
        handle_orbit(_step("orbit", direction="left"), state, scene, env, ctx)
    with pytest.raises(StepParameterError):
        handle_orbit(_step("orbit", direction="sideways", angle=10), state, scene, env, ctx)


def test_pan_turns_view_about_camera(state, scene, env, ctx):
    left = handle_pan(_step("pan", direction="left", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(left.state.position, [0, 0, 5])
    np.testing.assert_allclose(left.state.target, [-5, 0, 5], atol=1e-9)
    right = handle_pan(_step("pan", direction="right", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(right.state.target, [5, 0, 5], atol=1e-9)


def test_tilt_up_and_to_target(state, scene, env, ctx):
    up = handle_tilt(_step("tilt", direction="up", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(up.state.target, [0, 5, 5], atol=1e-9)
    down = handle_tilt(_step("tilt", direction="down", angle=45), state, scene, env, ctx)
    assert down.state.target[1] < 0
    aimed = handle_tilt(_step("tilt", target="object_top_center"), state, scene, env, ctx)
    np.testing.assert_allclose(aimed.state.target, [0, 1, 0])
    np.testing.assert_allclose(aimed.state.position, [0, 0, 5])


def test_rotate_yaw_and_pitch(state, scene, env, ctx):
    yaw = handle_rotate(_step("rotate", axis="yaw", angle=90), state, scene, env, ctx)
    np.testing.assert_allclose(yaw.state.target, [5, 0, 5], atol=1e-9)
    pitch = handle_rotate(_step("rotate", axis="pitch", angle=90, direction="up"), state, scene, env, ctx)
    np.testing.assert_allclose(pitch.state.target, [0, 5, 5], atol=1e-9)


def test_rotate_roll_is_reported_and_held(state, scene, env, ctx):
    result = handle_rotate(_step("rotate", axis="roll", angle=30), state, scene, env, ctx)
    assert len(result.commands) == 1
    np.testing.assert_allclose(result.commands[0].target, state.target)
    warnings = ctx.diagnostics.by_severity("warning")
    assert any("Roll is not supported" in w.message for w in warnings)


def test_zero_angle_pan_is_static(state, scene, env, ctx):
    result = handle_pan(_step("pan", direction="left", angle=0), state, scene, env, ctx)
    assert len(result.commands) == 1
    assert result.commands[0].duration == pytest.approx(2.0)
    assert math.isclose(result.commands[0].position[2], 5.0)


def test_orbit_segment_count_is_capped(state, scene, env, ctx):
    result = handle_orbit(_step("orbit", direction="right", angle=36000), state, scene, env, ctx)
    assert len(result.commands) == 721
    np.testing.assert_allclose(result.state.position, [0, 0, 5], atol=1e-6)
    assert sum(c.duration for c in result.commands) == pytest.approx(2.0)
    [warning] = ctx.diagnostics.by_severity("warning")
    assert "capped at 720" in warning.message
