"""Straight-line moves: zoom, dolly, truck and pedestal."""
from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np

from ..constraints import constrain_position
from ..descriptors import map_descriptor_to_goal_distance, map_descriptor_to_value
from ..errors import StepParameterError
from ..geometry import EPSILON, WORLD_UP, horizontal_right, normalize
from ..models import CameraState, EnvContext, MotionStep, SceneContext
from .common import (
    StepContext,
    StepResult,
    descriptor_param,
    name_param,
    number_param,
    require_target,
    static_hold,
    step_easing,
    string_param,
    transition,
)

logger = logging.getLogger(__name__)

DOLLY_SIGNS = {"forward": 1.0, "in": 1.0, "backward": -1.0, "out": -1.0}
TRUCK_SIGNS = {"right": 1.0, "left": -1.0}
PEDESTAL_SIGNS = {"up": 1.0, "down": -1.0}


def _direction_sign(step: MotionStep, signs: Dict[str, float]) -> Optional[float]:
    direction = string_param(step, "direction")
    if direction is None:
        return None
    if direction not in signs:
        raise StepParameterError(
            f"Unknown {step.type} direction '{direction}', expected one of {sorted(signs)}",
            direction,
            primitive=step.type,
        )
    return signs[direction]


def _requested_distance(
    step: MotionStep, scene: SceneContext, env: EnvContext, state: CameraState
) -> Optional[float]:
    """Explicit distance, else the descriptor mapped against the scene."""
    override = number_param(step, "distance_override", "distance")
    if override is not None:
        if override < 0:
            raise StepParameterError(f"{step.type} distance must not be negative", override, primitive=step.type)
        return override
    descriptor = descriptor_param(step, "distance_descriptor")
    if descriptor is not None:
        return map_descriptor_to_value(descriptor, "distance", step.type, scene, env, state)
    return None


def handle_zoom(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    direction = string_param(step, "direction")
    if direction not in ("in", "out"):
        raise StepParameterError(f"Zoom direction must be 'in' or 'out', got {direction!r}", primitive="zoom")

    target_name = name_param(step, "target") or "current_target"
    zoom_target = require_target(target_name, step, state, scene, env)
    offset = state.position - zoom_target
    current = float(np.linalg.norm(offset))
    if current < EPSILON:
        ctx.warn("Camera sits on the zoom target, holding position", "zoom")
        return static_hold(state, ctx.duration)

    factor = number_param(step, "factor_override", "factor")
    if factor is None:
        descriptor = descriptor_param(step, "factor_descriptor")
        goal = descriptor_param(step, "target_distance_descriptor")
        if descriptor is not None:
            factor = map_descriptor_to_value(
                descriptor, "factor", "zoom", scene, env, CameraState(state.position, zoom_target), direction
            )
        elif goal is not None:
            goal_distance = map_descriptor_to_goal_distance(goal, scene)
            if abs(current - goal_distance) < EPSILON:
                return static_hold(state, ctx.duration)
            factor = goal_distance / current
            if direction == "in" and factor >= 1.0:
                factor = 0.99
            elif direction == "out" and factor <= 1.0:
                factor = 1.01
        else:
            raise StepParameterError(
                "Zoom needs factor_override, factor_descriptor or target_distance_descriptor", primitive="zoom"
            )
    if factor <= 0:
        raise StepParameterError(f"Zoom factor must be positive, got {factor}", factor, primitive="zoom")

    new_distance = max(current * factor, 1e-6)
    candidate = zoom_target + offset / current * new_distance
    position = constrain_position(state.position, candidate, zoom_target, scene, env)
    logger.debug("Zoom %s by %.3f: distance %.3f -> %.3f", direction, factor, current, new_distance)
    return transition(state, CameraState(position, zoom_target), ctx.duration, step_easing(step, ctx))


def handle_dolly(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    view = normalize(state.view_vector)
    if view is None:
        ctx.warn("Camera sits on its target, cannot dolly", "dolly")
        return static_hold(state, ctx.duration)

    sign = _direction_sign(step, DOLLY_SIGNS)
    distance = _requested_distance(step, scene, env, state)
    if distance is not None:
        if sign is None:
            raise StepParameterError("Dolly needs direction forward or backward", primitive="dolly")
    else:
        goal = descriptor_param(step, "target_distance_descriptor")
        destination = name_param(step, "destination_target")
        if goal is not None:
            delta = state.distance - map_descriptor_to_goal_distance(goal, scene)
            sign = 1.0 if delta > 0 else -1.0
            distance = abs(delta)
        elif destination is not None:
            point = require_target(destination, step, state, scene, env)
            signed = float(np.dot(point - state.position, view))
            sign = 1.0 if signed >= 0 else -1.0
            distance = abs(signed)
        else:
            raise StepParameterError(
                "Dolly needs distance_override, distance_descriptor, target_distance_descriptor or destination_target",
                primitive="dolly",
            )

    if distance < EPSILON:
        return static_hold(state, ctx.duration)
    candidate = state.position + view * distance * sign
    position = constrain_position(state.position, candidate, state.target, scene, env)
    return transition(state, CameraState(position, state.target), ctx.duration, step_easing(step, ctx))


def _parallel_move(
    step: MotionStep,
    state: CameraState,
    scene: SceneContext,
    env: EnvContext,
    ctx: StepContext,
    axis: np.ndarray,
    signed_distance: float,
) -> StepResult:
    """Shift camera and target together along ``axis``.

    The target follows the displacement the camera actually made after
    clamping, so the view direction never changes.
    """
    if abs(signed_distance) < EPSILON:
        return static_hold(state, ctx.duration)
    candidate = state.position + axis * signed_distance
    position = constrain_position(state.position, candidate, None, scene, env)
    moved = position - state.position
    return transition(
        state, CameraState(position, state.target + moved), ctx.duration, step_easing(step, ctx)
    )


def _sideways_distance(
    step: MotionStep,
    state: CameraState,
    scene: SceneContext,
    env: EnvContext,
    signs: Dict[str, float],
    project,
) -> float:
    sign = _direction_sign(step, signs)
    distance = _requested_distance(step, scene, env, state)
    if distance is not None:
        if sign is None:
            raise StepParameterError(f"{step.type} needs direction {' or '.join(signs)}", primitive=step.type)
        return sign * distance
    destination = name_param(step, "destination_target")
    if destination is None:
        raise StepParameterError(
            f"{step.type} needs distance_override, distance_descriptor or destination_target", primitive=step.type
        )
    return project(require_target(destination, step, state, scene, env))


def handle_truck(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    right = horizontal_right(state.view_vector)
    signed = _sideways_distance(
        step, state, scene, env, TRUCK_SIGNS, lambda point: float(np.dot(point - state.position, right))
    )
    return _parallel_move(step, state, scene, env, ctx, right, signed)


def handle_pedestal(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    signed = _sideways_distance(
        step, state, scene, env, PEDESTAL_SIGNS, lambda point: float(point[1] - state.position[1])
    )
    return _parallel_move(step, state, scene, env, ctx, np.asarray(WORLD_UP), signed)
