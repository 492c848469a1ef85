"""Turn declarative cinematic motion plans into collision-aware camera keyframes."""
from __future__ import annotations

from .config import InterpreterConfig, load_config
from .descriptors import map_descriptor_to_goal_distance, map_descriptor_to_value, normalize_descriptor
from .diagnostics import Diagnostic, Diagnostics
from .errors import (
    ConfigurationError,
    InvalidPlanError,
    MotionInterpreterError,
    PlanParsingError,
    StepParameterError,
    UnresolvedTargetError,
    UnsupportedPrimitiveError,
)
from .geometry import clamp_position_with_raycast
from .interpreter import InterpretationResult, interpret, interpret_plan
from .models import (
    CameraCommand,
    CameraConstraints,
    CameraState,
    Descriptor,
    EnvContext,
    MotionPlan,
    MotionStep,
    SceneBounds,
    SceneContext,
    SceneFeature,
    vector,
)
from .targets import resolve_target_position
from .validator import ValidationResult, validate

__all__ = [
    "CameraCommand",
    "CameraConstraints",
    "CameraState",
    "ConfigurationError",
    "Descriptor",
    "Diagnostic",
    "Diagnostics",
    "EnvContext",
    "InterpretationResult",
    "InterpreterConfig",
    "InvalidPlanError",
    "MotionInterpreterError",
    "MotionPlan",
    "MotionStep",
    "PlanParsingError",
    "SceneBounds",
    "SceneContext",
    "SceneFeature",
    "StepParameterError",
    "UnresolvedTargetError",
    "UnsupportedPrimitiveError",
    "ValidationResult",
    "clamp_position_with_raycast",
    "interpret",
    "interpret_plan",
    "load_config",
    "map_descriptor_to_goal_distance",
    "map_descriptor_to_value",
    "normalize_descriptor",
    "resolve_target_position",
    "validate",
    "vector",
]
