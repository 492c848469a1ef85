from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

import numpy as np

from ..config import InterpreterConfig
from ..descriptors import normalize_descriptor
from ..diagnostics import Diagnostics
from ..easing import DEFAULT_EASING, is_valid_easing, resolve_easing
from ..errors import StepParameterError, UnresolvedTargetError
from ..geometry import EPSILON
from ..models import CameraCommand, CameraState, Descriptor, EnvContext, MotionStep, SceneContext
from ..targets import resolve_target_position


@dataclass(frozen=True)
class StepContext:
    """Per-step inputs a handler needs besides the step, state and scene."""

    duration: float
    config: InterpreterConfig = field(default_factory=InterpreterConfig)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    index: int = 0
    default_easing: str = DEFAULT_EASING

    def warn(self, message: str, primitive: str) -> None:
        self.diagnostics.warning(message, step_index=self.index, primitive=primitive)


@dataclass(frozen=True)
class StepResult:
    commands: List[CameraCommand]
    state: CameraState


Handler = Callable[[MotionStep, CameraState, SceneContext, EnvContext, StepContext], StepResult]


def number_param(step: MotionStep, *names: str) -> Optional[float]:
    """First present numeric parameter among ``names``, or None."""
    for name in names:
        raw = step.parameters.get(name)
        if raw is None:
            continue
        if isinstance(raw, bool):
            raise StepParameterError(f"Parameter '{name}' must be a number", raw, primitive=step.type)
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise StepParameterError(f"Parameter '{name}' must be a number, got {raw!r}", raw, primitive=step.type) from exc
        if not math.isfinite(value):
            raise StepParameterError(f"Parameter '{name}' must be finite", raw, primitive=step.type)
        return value
    return None


def string_param(step: MotionStep, *names: str) -> Optional[str]:
    for name in names:
        raw = step.parameters.get(name)
        if isinstance(raw, str) and raw.strip():
            return raw.strip().lower()
    return None


def name_param(step: MotionStep, *names: str) -> Optional[str]:
    """Like :func:`string_param` but keeps case, for feature ids and descriptions."""
    for name in names:
        raw = step.parameters.get(name)
        if isinstance(raw, str) and raw.strip():
            return raw.strip()
    return None


def descriptor_param(step: MotionStep, name: str) -> Optional[Descriptor]:
    return normalize_descriptor(step.parameters.get(name))


def require_target(
    name: str, step: MotionStep, state: CameraState, scene: SceneContext, env: EnvContext
) -> np.ndarray:
    point = resolve_target_position(name, scene, env, state.target)
    if point is None:
        raise UnresolvedTargetError(name, primitive=step.type)
    return point


def step_easing(step: MotionStep, ctx: StepContext) -> str:
    explicit = step.parameters.get("easing")
    if explicit is not None and not is_valid_easing(explicit):
        ctx.warn(f"Unknown easing {explicit!r}, falling back to speed/default", step.type)
        explicit = None
    return resolve_easing(explicit, step.parameters.get("speed"), ctx.default_easing)


def static_hold(state: CameraState, duration: float) -> StepResult:
    """One linear keyframe that keeps the camera where it is."""
    command = CameraCommand(state.position, state.target, duration, "linear")
    return StepResult([command], state)


def is_same_state(a: CameraState, b: CameraState) -> bool:
    return (
        float(np.linalg.norm(a.position - b.position)) < EPSILON
        and float(np.linalg.norm(a.target - b.target)) < EPSILON
    )


def transition(state: CameraState, new_state: CameraState, duration: float, easing: str) -> StepResult:
    """Start keyframe at the current state followed by the eased move to ``new_state``.

    Collapses to a static hold when nothing actually moves.
    """
    if is_same_state(state, new_state):
        return static_hold(state, duration)
    commands = [
        CameraCommand(state.position, state.target, 0.0, easing),
        CameraCommand(new_state.position, new_state.target, duration, easing),
    ]
    return StepResult(commands, new_state)
