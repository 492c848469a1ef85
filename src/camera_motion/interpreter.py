from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .config import InterpreterConfig
from .diagnostics import Diagnostics
from .easing import is_valid_easing
from .errors import InvalidPlanError, StepParameterError, UnsupportedPrimitiveError
from .handlers import HANDLERS, StepContext
from .models import CameraCommand, CameraState, EnvContext, MotionPlan, MotionStep, SceneContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterpretationResult:
    commands: List[CameraCommand]
    diagnostics: Diagnostics
    step_durations: List[float]
    final_state: CameraState

    @property
    def total_duration(self) -> float:
        return float(sum(command.duration for command in self.commands))

    def to_dict(self) -> Dict:
        return {
            "commands": [command.to_dict() for command in self.commands],
            "diagnostics": [entry.to_dict() for entry in self.diagnostics],
            "step_durations": list(self.step_durations),
            "final_state": self.final_state.to_dict(),
        }


def allocate_durations(steps: Sequence[MotionStep], requested: float, tolerance: float = 1e-4) -> List[float]:
    """Split ``requested`` seconds across steps by their duration ratios.

    Ratios that do not add up to one are rescaled so the allocations sum to
    the requested duration; when every ratio is zero the time is split evenly.
    """
    ratios = [
        step.duration_ratio if math.isfinite(step.duration_ratio) and step.duration_ratio > 0 else 0.0
        for step in steps
    ]
    ideal = [requested * ratio for ratio in ratios]
    total = sum(ideal)
    if total <= 0:
        logger.warning("All duration ratios are zero, splitting %.3fs evenly over %d steps", requested, len(steps))
        return [requested / len(steps)] * len(steps)
    if abs(total - requested) > tolerance:
        logger.debug("Scaling step durations by %.4f to match %.3fs", requested / total, requested)
        return [value * requested / total for value in ideal]
    return ideal


def _check_commands(commands: Sequence[CameraCommand], primitive: str) -> None:
    for command in commands:
        finite = bool(np.all(np.isfinite(command.position)) and np.all(np.isfinite(command.target)))
        if not finite or not math.isfinite(command.duration) or command.duration < 0:
            raise StepParameterError(
                "Handler produced a keyframe with non-finite values or negative duration",
                command.to_dict(),
                primitive=primitive,
            )


def _check_velocity(
    commands: Sequence[CameraCommand],
    start: np.ndarray,
    max_velocity: float,
    diagnostics: Diagnostics,
    index: int,
    primitive: str,
) -> None:
    previous = start
    for command in commands:
        if command.duration > 0:
            speed = float(np.linalg.norm(command.position - previous)) / command.duration
            if speed > max_velocity:
                diagnostics.warning(
                    f"Camera speed {speed:.2f}/s exceeds max_velocity {max_velocity:.2f}/s",
                    step_index=index,
                    primitive=primitive,
                )
        previous = command.position


def interpret_plan(
    plan: MotionPlan,
    scene: SceneContext,
    env: EnvContext,
    initial_state: CameraState,
    *,
    config: Optional[InterpreterConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> InterpretationResult:
    """Run every step of ``plan`` in order and collect the camera keyframes.

    Each handler receives the state left by the previous step. A step that
    raises :class:`StepParameterError` is skipped: it adds no keyframes, the
    state carries over unchanged and a diagnostic is recorded.
    """
    config = config or InterpreterConfig()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    if plan is None or not plan.steps:
        raise InvalidPlanError("Motion plan is missing or has no steps")
    requested = plan.requested_duration
    if not math.isfinite(requested) or requested <= 0:
        raise InvalidPlanError(f"requested_duration must be positive, got {requested}", requested)

    default_easing = config.default_easing
    if plan.default_easing is not None:
        if is_valid_easing(plan.default_easing):
            default_easing = plan.default_easing
        else:
            diagnostics.warning(f"Plan default easing '{plan.default_easing}' is unknown, using {default_easing}")

    durations = allocate_durations(plan.steps, requested, config.duration_tolerance)
    state = initial_state
    commands: List[CameraCommand] = []
    for index, (step, duration) in enumerate(zip(plan.steps, durations)):
        ctx = StepContext(duration, config, diagnostics, index, default_easing)
        try:
            handler = HANDLERS.get(step.type)
            if handler is None:
                raise UnsupportedPrimitiveError(f"Unknown primitive '{step.type}'", step.type, primitive=step.type)
            result = handler(step, state, scene, env, ctx)
            _check_commands(result.commands, step.type)
        except StepParameterError as exc:
            diagnostics.warning(f"Step skipped: {exc}", step_index=index, primitive=step.type)
            continue
        if config.max_velocity is not None:
            _check_velocity(result.commands, state.position, config.max_velocity, diagnostics, index, step.type)
        logger.debug("Step %d (%s): %d keyframes over %.3fs", index, step.type, len(result.commands), duration)
        commands.extend(result.commands)
        state = result.state

    return InterpretationResult(commands, diagnostics, durations, state)


def interpret(
    plan: MotionPlan,
    scene: SceneContext,
    env: EnvContext,
    initial_state: CameraState,
    *,
    config: Optional[InterpreterConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> List[CameraCommand]:
    return interpret_plan(plan, scene, env, initial_state, config=config, diagnostics=diagnostics).commands
