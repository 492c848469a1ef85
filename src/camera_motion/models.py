from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .errors import PlanParsingError


class Descriptor(str, Enum):
    """Qualitative magnitude of a move, smallest to largest."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


def as_vector(value: Any) -> np.ndarray:
    """Coerce a sequence or an ``{x, y, z}`` mapping into a read-only 3-vector."""
    if isinstance(value, Mapping):
        try:
            coords = [value["x"], value["y"], value["z"]]
        except KeyError as exc:
            raise PlanParsingError(f"Vector is missing component {exc}", value) from exc
    else:
        coords = value
    try:
        arr = np.array(coords, dtype=float).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise PlanParsingError(f"Cannot read vector from {value!r}", value) from exc
    if arr.shape != (3,):
        raise PlanParsingError(f"Expected 3 components, got {arr.shape[0]}", value)
    arr.setflags(write=False)
    return arr


def vector(x: float, y: float, z: float) -> np.ndarray:
    return as_vector((x, y, z))


def _float(payload: Mapping, *keys: str, default: float | None = None) -> float:
    for key in keys:
        if key in payload and payload[key] is not None:
            try:
                return float(payload[key])
            except (TypeError, ValueError) as exc:
                raise PlanParsingError(f"Field '{key}' is not a number: {payload[key]!r}", payload) from exc
    if default is None:
        raise PlanParsingError(f"Missing required field '{keys[0]}'", payload)
    return default


def _first(payload: Mapping, *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _require_mapping(payload: Any, what: str) -> Mapping:
    if not isinstance(payload, Mapping):
        raise PlanParsingError(f"{what} must be an object, got {type(payload).__name__}", payload)
    return payload


@dataclass(frozen=True, eq=False)
class SceneBounds:
    """Axis-aligned box around the subject."""

    minimum: np.ndarray
    maximum: np.ndarray
    center: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        lo = as_vector(self.minimum)
        hi = as_vector(self.maximum)
        minimum = as_vector(np.minimum(lo, hi))
        maximum = as_vector(np.maximum(lo, hi))
        if self.center is None:
            center = as_vector((minimum + maximum) / 2.0)
        else:
            center = as_vector(self.center)
        object.__setattr__(self, "minimum", minimum)
        object.__setattr__(self, "maximum", maximum)
        object.__setattr__(self, "center", center)

    @property
    def extent(self) -> np.ndarray:
        return self.maximum - self.minimum

    @property
    def diagonal(self) -> float:
        return float(np.linalg.norm(self.extent))

    def translated(self, dy: float) -> SceneBounds:
        """Return the box shifted vertically by ``dy``."""
        offset = np.array([0.0, float(dy), 0.0])
        return SceneBounds(self.minimum + offset, self.maximum + offset, self.center + offset)

    def contains(self, point: np.ndarray, *, strict: bool = False) -> bool:
        p = np.asarray(point, dtype=float)
        if strict:
            return bool(np.all(p > self.minimum) and np.all(p < self.maximum))
        return bool(np.all(p >= self.minimum) and np.all(p <= self.maximum))

    @classmethod
    def from_dict(cls, payload: Mapping) -> SceneBounds:
        payload = _require_mapping(payload, "bounds")
        minimum = _first(payload, "min", "minimum")
        maximum = _first(payload, "max", "maximum")
        if minimum is None or maximum is None:
            raise PlanParsingError("Bounds require both 'min' and 'max'", payload)
        center = payload.get("center")
        return cls(
            as_vector(minimum),
            as_vector(maximum),
            as_vector(center) if center is not None else None,
        )

    def to_dict(self) -> Dict:
        return {
            "min": self.minimum.tolist(),
            "max": self.maximum.tolist(),
            "center": self.center.tolist(),
        }


@dataclass(frozen=True, eq=False)
class SceneFeature:
    id: str
    position: np.ndarray
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vector(self.position))

    @classmethod
    def from_dict(cls, payload: Mapping) -> SceneFeature:
        payload = _require_mapping(payload, "feature")
        if payload.get("position") is None:
            raise PlanParsingError("Feature is missing 'position'", payload)
        return cls(
            id=str(payload.get("id", "")),
            position=as_vector(payload["position"]),
            description=str(payload.get("description") or ""),
        )


@dataclass(frozen=True, eq=False)
class SceneContext:
    """Read-only description of the subject supplied by scene analysis."""

    bounds: Optional[SceneBounds] = None
    features: Tuple[SceneFeature, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(self.features))

    @property
    def dimensions(self) -> Optional[np.ndarray]:
        return self.bounds.extent if self.bounds is not None else None

    @property
    def object_size(self) -> float:
        """Bounding-box diagonal, 1.0 when the scene carries no bounds."""
        if self.bounds is None:
            return 1.0
        return self.bounds.diagonal

    @classmethod
    def from_dict(cls, payload: Mapping | None) -> SceneContext:
        if payload is None:
            return cls()
        payload = _require_mapping(payload, "scene")
        raw_bounds = payload.get("bounds")
        if raw_bounds is None and isinstance(payload.get("spatial"), Mapping):
            raw_bounds = payload["spatial"].get("bounds")
        raw_features = payload.get("features") or []
        if not isinstance(raw_features, list):
            raise PlanParsingError("'features' must be a list", payload)
        return cls(
            bounds=SceneBounds.from_dict(raw_bounds) if raw_bounds is not None else None,
            features=tuple(SceneFeature.from_dict(item) for item in raw_features),
        )


@dataclass(frozen=True)
class CameraConstraints:
    min_distance: float
    max_distance: float
    min_height: float
    max_height: float

    def __post_init__(self) -> None:
        if self.min_distance > self.max_distance:
            raise PlanParsingError(
                f"min_distance {self.min_distance} exceeds max_distance {self.max_distance}"
            )
        if self.min_height > self.max_height:
            raise PlanParsingError(f"min_height {self.min_height} exceeds max_height {self.max_height}")

    @classmethod
    def from_dict(cls, payload: Mapping) -> CameraConstraints:
        payload = _require_mapping(payload, "cameraConstraints")
        return cls(
            min_distance=_float(payload, "minDistance", "min_distance", default=0.0),
            max_distance=_float(payload, "maxDistance", "max_distance", default=math.inf),
            min_height=_float(payload, "minHeight", "min_height", default=-math.inf),
            max_height=_float(payload, "maxHeight", "max_height", default=math.inf),
        )


@dataclass(frozen=True)
class EnvContext:
    """Safety envelope and framing preference supplied by environment analysis."""

    camera_constraints: Optional[CameraConstraints] = None
    user_vertical_adjustment: float = 0.0

    @classmethod
    def from_dict(cls, payload: Mapping | None) -> EnvContext:
        if payload is None:
            return cls()
        payload = _require_mapping(payload, "env")
        raw_constraints = _first(payload, "cameraConstraints", "camera_constraints")
        return cls(
            camera_constraints=CameraConstraints.from_dict(raw_constraints) if raw_constraints is not None else None,
            user_vertical_adjustment=_float(
                payload, "userVerticalAdjustment", "user_vertical_adjustment", default=0.0
            ),
        )


@dataclass(frozen=True, eq=False)
class CameraState:
    position: np.ndarray
    target: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vector(self.position))
        object.__setattr__(self, "target", as_vector(self.target))

    @property
    def view_vector(self) -> np.ndarray:
        return self.target - self.position

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.view_vector))

    @classmethod
    def from_dict(cls, payload: Mapping) -> CameraState:
        payload = _require_mapping(payload, "camera")
        if payload.get("position") is None or payload.get("target") is None:
            raise PlanParsingError("Camera state requires 'position' and 'target'", payload)
        return cls(as_vector(payload["position"]), as_vector(payload["target"]))

    def to_dict(self) -> Dict:
        return {"position": self.position.tolist(), "target": self.target.tolist()}


@dataclass(frozen=True, eq=False)
class MotionStep:
    type: str
    parameters: Mapping[str, Any]
    duration_ratio: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
        object.__setattr__(self, "duration_ratio", float(self.duration_ratio))

    @classmethod
    def from_dict(cls, payload: Mapping) -> MotionStep:
        payload = _require_mapping(payload, "step")
        raw_type = payload.get("type")
        if not isinstance(raw_type, str) or not raw_type.strip():
            raise PlanParsingError("Step is missing its 'type'", payload)
        parameters = payload.get("parameters")
        if parameters is None:
            parameters = {}
        if not isinstance(parameters, Mapping):
            raise PlanParsingError("Step 'parameters' must be an object", payload)
        return cls(
            type=raw_type.strip().lower(),
            parameters=parameters,
            duration_ratio=_float(payload, "duration_ratio", "durationRatio", default=0.0),
        )


@dataclass(frozen=True, eq=False)
class MotionPlan:
    steps: Tuple[MotionStep, ...]
    requested_duration: float
    default_easing: Optional[str] = None

    def __post_init__(self) -> None:
        if self.steps is None:
            raise PlanParsingError("Motion plan has no step list")
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "requested_duration", float(self.requested_duration))

    @classmethod
    def from_dict(cls, payload: Mapping) -> MotionPlan:
        payload = _require_mapping(payload, "plan")
        raw_steps = payload.get("steps")
        if not isinstance(raw_steps, list):
            raise PlanParsingError("Plan 'steps' must be a list", payload)
        metadata = payload.get("metadata") or {}
        metadata = _require_mapping(metadata, "plan metadata")
        default_easing = metadata.get("default_easing")
        return cls(
            steps=tuple(MotionStep.from_dict(item) for item in raw_steps),
            requested_duration=_float(metadata, "requested_duration", "requestedDuration", default=0.0),
            default_easing=str(default_easing) if default_easing is not None else None,
        )


@dataclass(frozen=True, eq=False)
class CameraCommand:
    """One keyframe of the output trajectory."""

    position: np.ndarray
    target: np.ndarray
    duration: float
    easing: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vector(self.position))
        object.__setattr__(self, "target", as_vector(self.target))
        object.__setattr__(self, "duration", float(self.duration))

    @property
    def state(self) -> CameraState:
        return CameraState(self.position, self.target)

    def to_dict(self) -> Dict:
        return {
            "position": self.position.tolist(),
            "target": self.target.tolist(),
            "duration": self.duration,
            "easing": self.easing,
        }
