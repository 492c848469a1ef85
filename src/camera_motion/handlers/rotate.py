"""Angular moves: orbit around a point, and pan/tilt/rotate about the camera itself."""
from __future__ import annotations

import logging
import math
from typing import Dict

import numpy as np

from ..constraints import constrain_position
from ..easing import easing_function
from ..errors import StepParameterError, UnresolvedTargetError
from ..geometry import EPSILON, camera_axes, normalize, rotate_vector
from ..models import CameraCommand, CameraState, EnvContext, MotionStep, SceneContext, as_vector
from ..targets import resolve_target_position
from .common import (
    StepContext,
    StepResult,
    name_param,
    number_param,
    require_target,
    static_hold,
    step_easing,
    string_param,
    transition,
)

logger = logging.getLogger(__name__)

ORBIT_SIGNS = {
    "clockwise": -1.0,
    "left": -1.0,
    "counter-clockwise": 1.0,
    "counterclockwise": 1.0,
    "right": 1.0,
    "up": 1.0,
    "down": -1.0,
}
PAN_SIGNS = {"left": -1.0, "right": 1.0}
TILT_SIGNS = {"up": -1.0, "down": 1.0}
MAX_ORBIT_SEGMENTS = 720
WORLD_AXES = {
    "x": np.array([1.0, 0.0, 0.0]),
    "y": np.array([0.0, 1.0, 0.0]),
    "z": np.array([0.0, 0.0, 1.0]),
}


def _signed_angle(step: MotionStep, signs: Dict[str, float], *, required: bool) -> float:
    """Angle in radians; a recognised direction fixes the sign, else the angle's own sign is kept."""
    degrees = number_param(step, "angle")
    if degrees is None:
        raise StepParameterError(f"{step.type} needs an 'angle'", primitive=step.type)
    direction = string_param(step, "direction")
    if direction is None:
        if required:
            raise StepParameterError(f"{step.type} needs a direction", primitive=step.type)
        return math.radians(degrees)
    if direction not in signs:
        raise StepParameterError(f"Unknown {step.type} direction '{direction}'", direction, primitive=step.type)
    return math.radians(abs(degrees)) * signs[direction]


def _turn_view(state: CameraState, axis: np.ndarray, angle: float) -> CameraState:
    view = rotate_vector(state.view_vector, axis, angle)
    return CameraState(state.position, state.position + view)


def handle_orbit(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    """Swing the camera around a center in arc segments, always looking at the center.

    The arc is split into segments no wider than ``orbit_step_degrees``;
    progress along it follows the step's easing curve and every segment is
    clamped from the previous segment's end.
    """
    angle = _signed_angle(step, ORBIT_SIGNS, required=True)
    direction = string_param(step, "direction")

    center_name = name_param(step, "target") or "object_center"
    center = resolve_target_position(center_name, scene, env, state.target)
    if center is None:
        if scene.bounds is None:
            raise UnresolvedTargetError(center_name, primitive="orbit")
        ctx.warn(f"Orbit center '{center_name}' not found, using the bounds center", "orbit")
        center = as_vector(scene.bounds.center + np.array([0.0, env.user_vertical_adjustment, 0.0]))

    radius = state.position - center
    if float(np.linalg.norm(radius)) < EPSILON:
        ctx.warn("Camera sits on the orbit center, holding position", "orbit")
        return static_hold(state, ctx.duration)
    radius_factor = number_param(step, "radius_factor")
    if radius_factor is None:
        radius_factor = 1.0
    if radius_factor <= 0:
        raise StepParameterError("radius_factor must be positive", radius_factor, primitive="orbit")
    if angle == 0.0 and radius_factor == 1.0:
        return static_hold(state, ctx.duration)

    right, up = camera_axes(center - state.position)
    if direction in ("up", "down"):
        axis = right
    else:
        axis_name = string_param(step, "axis") or "y"
        if axis_name == "camera_up":
            axis = -up
        elif axis_name in WORLD_AXES:
            axis = WORLD_AXES[axis_name]
        else:
            ctx.warn(f"Unknown orbit axis '{axis_name}', using y", "orbit")
            axis = WORLD_AXES["y"]

    segments = max(1, math.ceil(abs(math.degrees(angle)) / ctx.config.orbit_step_degrees))
    if segments > MAX_ORBIT_SEGMENTS:
        ctx.warn(
            f"Orbit of {math.degrees(angle):.0f} deg needs {segments} segments, capped at {MAX_ORBIT_SEGMENTS}",
            "orbit",
        )
        segments = MAX_ORBIT_SEGMENTS
    easing_name = step_easing(step, ctx)
    ease = easing_function(easing_name)
    segment_duration = ctx.duration / segments

    commands = [CameraCommand(state.position, center, 0.0, easing_name)]
    previous = state.position
    for k in range(1, segments + 1):
        progress = k / segments
        arm = rotate_vector(radius, axis, angle * ease(progress)) * radius_factor ** progress
        position = constrain_position(previous, center + arm, center, scene, env)
        commands.append(CameraCommand(position, center, segment_duration, "linear"))
        previous = position
    logger.debug("Orbit %.1f deg in %d segments around %s", math.degrees(angle), segments, center.round(3))
    return StepResult(commands, CameraState(previous, center))


def handle_pan(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    angle = _signed_angle(step, PAN_SIGNS, required=True)
    if normalize(state.view_vector) is None:
        ctx.warn("Camera sits on its target, cannot pan", "pan")
        return static_hold(state, ctx.duration)
    _, up = camera_axes(state.view_vector)
    return transition(state, _turn_view(state, up, angle), ctx.duration, step_easing(step, ctx))


def handle_tilt(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    target_name = name_param(step, "target")
    if target_name is not None and step.parameters.get("angle") is None:
        point = require_target(target_name, step, state, scene, env)
        return transition(state, CameraState(state.position, point), ctx.duration, step_easing(step, ctx))

    angle = _signed_angle(step, TILT_SIGNS, required=True)
    if normalize(state.view_vector) is None:
        ctx.warn("Camera sits on its target, cannot tilt", "tilt")
        return static_hold(state, ctx.duration)
    right, _ = camera_axes(state.view_vector)
    return transition(state, _turn_view(state, right, angle), ctx.duration, step_easing(step, ctx))


def _rotation_axis(step: MotionStep, ctx: StepContext) -> str:
    axis = string_param(step, "axis") or "yaw"
    if axis not in ("yaw", "pitch", "roll"):
        ctx.warn(f"Unknown rotate axis '{axis}', using yaw", "rotate")
        return "yaw"
    return axis


def handle_rotate(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    axis_name = _rotation_axis(step, ctx)
    if axis_name == "roll":
        ctx.warn("Roll is not supported, holding position", "rotate")
        return static_hold(state, ctx.duration)

    signs = PAN_SIGNS if axis_name == "yaw" else TILT_SIGNS
    angle = _signed_angle(step, signs, required=False)
    if normalize(state.view_vector) is None:
        ctx.warn("Camera sits on its target, cannot rotate", "rotate")
        return static_hold(state, ctx.duration)
    right, up = camera_axes(state.view_vector)
    axis = up if axis_name == "yaw" else right
    return transition(state, _turn_view(state, axis, angle), ctx.duration, step_easing(step, ctx))
