from __future__ import annotations

import logging

import numpy as np

from ..constraints import constrain_position
from ..errors import StepParameterError
from ..models import CameraCommand, CameraState, EnvContext, MotionStep, SceneContext
from .common import StepContext, StepResult, name_param, require_target, static_hold, step_easing, string_param, transition

logger = logging.getLogger(__name__)


def handle_static(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    return static_hold(state, ctx.duration)


def handle_move_to(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    """Relocate the camera to a named point.

    With ``look_at`` the camera lands on the destination and faces the
    look-at point; without it the camera stops at ``destination +
    move_to_offset`` and faces the destination. ``speed: instant`` cuts
    there and holds for the rest of the step.
    """
    destination_name = name_param(step, "target", "destination")
    if destination_name is None:
        raise StepParameterError("move_to needs a 'target'", primitive="move_to")
    destination = require_target(destination_name, step, state, scene, env)

    look_at_name = name_param(step, "look_at")
    if look_at_name is not None:
        look_target = require_target(look_at_name, step, state, scene, env)
        candidate = destination
    else:
        look_target = destination
        candidate = destination + np.asarray(ctx.config.move_to_offset, dtype=float)

    instant = string_param(step, "speed") == "instant"
    start = candidate if instant else state.position
    position = constrain_position(start, candidate, look_target, scene, env)
    new_state = CameraState(position, look_target)

    if not instant:
        return transition(state, new_state, ctx.duration, step_easing(step, ctx))

    cut = min(ctx.config.instant_cut_duration, ctx.duration)
    commands = [CameraCommand(position, look_target, cut, "linear")]
    remainder = ctx.duration - cut
    if remainder > 0:
        commands.append(CameraCommand(position, look_target, remainder, "linear"))
    logger.debug("move_to cut to %s", position.round(3))
    return StepResult(commands, new_state)


def handle_focus_on(
    step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext, ctx: StepContext
) -> StepResult:
    target_name = name_param(step, "target")
    if target_name is None:
        raise StepParameterError("focus_on needs a 'target'", primitive="focus_on")
    point = require_target(target_name, step, state, scene, env)
    if step.parameters.get("adjust_framing") is True:
        ctx.warn("adjust_framing is not supported, only the target changes", "focus_on")
    return transition(state, CameraState(state.position, point), ctx.duration, step_easing(step, ctx))
