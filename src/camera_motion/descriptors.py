"""Qualitative magnitude words ("small", "far", ...) mapped to scene-scaled numbers."""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Optional

from .errors import StepParameterError
from .models import CameraState, Descriptor, EnvContext, SceneContext

logger = logging.getLogger(__name__)

ALIASES: Dict[str, Descriptor] = {
    "tiny": Descriptor.TINY,
    "verytiny": Descriptor.TINY,
    "extremelytiny": Descriptor.TINY,
    "small": Descriptor.SMALL,
    "verysmall": Descriptor.SMALL,
    "close": Descriptor.SMALL,
    "nearer": Descriptor.SMALL,
    "near": Descriptor.SMALL,
    "closer": Descriptor.SMALL,
    "medium": Descriptor.MEDIUM,
    "mid": Descriptor.MEDIUM,
    "moderate": Descriptor.MEDIUM,
    "large": Descriptor.LARGE,
    "verylarge": Descriptor.LARGE,
    "far": Descriptor.LARGE,
    "farther": Descriptor.LARGE,
    "distant": Descriptor.LARGE,
    "huge": Descriptor.HUGE,
    "veryhuge": Descriptor.HUGE,
    "gigantic": Descriptor.HUGE,
    "veryfar": Descriptor.HUGE,
    "extremelyfar": Descriptor.HUGE,
}

ZOOM_IN_FACTORS = {
    Descriptor.TINY: 0.9,
    Descriptor.SMALL: 0.7,
    Descriptor.MEDIUM: 0.5,
    Descriptor.LARGE: 0.3,
    Descriptor.HUGE: 0.15,
}
ZOOM_OUT_FACTORS = {
    Descriptor.TINY: 1.1,
    Descriptor.SMALL: 1.3,
    Descriptor.MEDIUM: 1.8,
    Descriptor.LARGE: 2.5,
    Descriptor.HUGE: 4.0,
}
DISTANCE_SCALES = {
    Descriptor.TINY: 0.1,
    Descriptor.SMALL: 0.3,
    Descriptor.MEDIUM: 0.75,
    Descriptor.LARGE: 1.5,
    Descriptor.HUGE: 3.0,
}
GOAL_DISTANCE_SCALES = {
    Descriptor.TINY: 0.5,
    Descriptor.SMALL: 1.0,
    Descriptor.MEDIUM: 1.5,
    Descriptor.LARGE: 2.5,
    Descriptor.HUGE: 4.0,
}

_SEPARATORS = re.compile(r"[\s_-]")


def normalize_descriptor(raw: Any) -> Optional[Descriptor]:
    if isinstance(raw, Descriptor):
        return raw
    if not isinstance(raw, str):
        return None
    return ALIASES.get(_SEPARATORS.sub("", raw.lower()))


def map_descriptor_to_value(
    descriptor: Descriptor,
    magnitude_type: str,
    motion_type: str,
    scene: SceneContext,
    env: EnvContext,
    state: CameraState,
    direction: Optional[str] = None,
) -> float:
    """Turn a descriptor into a zoom factor or a travel distance.

    Zoom factors come from a direction-aware table, clamped so the resulting
    distance stays within the camera constraints and kept on the requested
    side of 1.0. Distances scale a per-motion base metric (height for
    pedestal, width for truck, view distance for dolly, object size
    otherwise) and are capped at ``max(5 * size, 20)``.
    """
    size = scene.object_size
    dims = scene.dimensions
    height = float(dims[1]) if dims is not None else size * 0.5
    width = float(dims[0]) if dims is not None else size * 0.5
    current_distance = state.distance

    if magnitude_type == "factor" and motion_type == "zoom":
        if direction not in ("in", "out"):
            raise StepParameterError(f"Zoom factor mapping requires direction in/out, got {direction!r}", primitive="zoom")
        table = ZOOM_IN_FACTORS if direction == "in" else ZOOM_OUT_FACTORS
        value = table[descriptor]
        constraints = env.camera_constraints
        min_distance = constraints.min_distance if constraints is not None else 0.1
        max_distance = constraints.max_distance if constraints is not None else math.inf
        if current_distance > 1e-9:
            projected = current_distance * value
            if projected < min_distance:
                value = min_distance / current_distance
                logger.warning("Zoom factor clamped by min distance to %.3f", value)
            if projected > max_distance:
                value = max_distance / current_distance
                logger.warning("Zoom factor clamped by max distance to %.3f", value)
        if direction == "in" and value >= 1.0:
            value = 0.99
        if direction == "out" and value <= 1.0:
            value = 1.01
        logger.debug("Zoom descriptor '%s' (%s) -> factor %.3f", descriptor.value, direction, value)
        return value

    if motion_type == "pedestal":
        base = height
    elif motion_type == "truck":
        base = width
    elif motion_type == "dolly":
        base = max(size * 0.5, current_distance * 0.5)
    else:
        base = size
    base = max(base, 0.1)

    scale = DISTANCE_SCALES[descriptor]
    value = base * scale
    if (
        motion_type == "dolly"
        and descriptor in (Descriptor.TINY, Descriptor.SMALL)
        and current_distance < base
    ):
        value = current_distance * scale
    ceiling = max(size * 5.0, 20.0)
    if value > ceiling:
        logger.warning("Distance %.2f for %s capped at %.2f", value, motion_type, ceiling)
        value = ceiling
    value = max(value, 1e-6)
    logger.debug("Distance descriptor '%s' for %s -> %.3f", descriptor.value, motion_type, value)
    return value


def map_descriptor_to_goal_distance(descriptor: Descriptor, scene: SceneContext) -> float:
    goal = max(GOAL_DISTANCE_SCALES[descriptor] * scene.object_size, 0.05)
    logger.debug("Goal distance for '%s' -> %.3f", descriptor.value, goal)
    return goal
