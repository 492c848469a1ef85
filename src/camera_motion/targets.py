from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import numpy as np

from .models import EnvContext, SceneBounds, SceneContext, as_vector

logger = logging.getLogger(__name__)

CURRENT_TARGET = "current_target"

# (x, y, z) picks per landmark: "min"/"max" read the box, "c" reads the center.
LANDMARKS: Dict[str, tuple] = {
    "object_center": ("c", "c", "c"),
    "object_top_center": ("c", "max", "c"),
    "object_bottom_center": ("c", "min", "c"),
    "object_left_center": ("min", "c", "c"),
    "object_right_center": ("max", "c", "c"),
    "object_front_center": ("c", "c", "max"),
    "object_back_center": ("c", "c", "min"),
    "object_front_left_corner": ("min", "c", "max"),
    "object_front_right_corner": ("max", "c", "max"),
    "object_back_left_corner": ("min", "c", "min"),
    "object_back_right_corner": ("max", "c", "min"),
}

ALIASES: Dict[str, str] = {
    "center": "object_center",
    "object": "object_center",
    "top": "object_top_center",
    "bottom": "object_bottom_center",
    "left": "object_left_center",
    "right": "object_right_center",
    "front": "object_front_center",
    "back": "object_back_center",
}


def landmark_position(name: str, bounds: SceneBounds, vertical_adjustment: float = 0.0) -> Optional[np.ndarray]:
    picks = LANDMARKS.get(name)
    if picks is None:
        return None
    source: Dict[str, Callable[[int], float]] = {
        "min": lambda axis: bounds.minimum[axis],
        "max": lambda axis: bounds.maximum[axis],
        "c": lambda axis: bounds.center[axis],
    }
    point = np.array([source[pick](axis) for axis, pick in enumerate(picks)], dtype=float)
    point[1] += vertical_adjustment
    return as_vector(point)


def resolve_target_position(
    name: Optional[str],
    scene: SceneContext,
    env: EnvContext,
    current_target: np.ndarray,
) -> Optional[np.ndarray]:
    """Map a symbolic target name to a world point.

    Lookup order is ``current_target``, full ``object_*`` landmark names
    (shifted by the user's vertical adjustment), scene features by id and
    by description, and last the short aliases such as ``top`` or ``left``,
    so a feature named like an alias still resolves to the feature.
    Returns None when nothing matches.
    """
    if name is None:
        return None
    key = str(name).strip()
    if not key:
        return None
    lowered = key.lower()
    if lowered == CURRENT_TARGET:
        return as_vector(current_target)

    if lowered in LANDMARKS:
        return _landmark_or_none(lowered, scene, env)

    for feature in scene.features:
        if feature.id == key:
            logger.debug("Resolved '%s' to feature id", key)
            return feature.position
    for feature in scene.features:
        if feature.description and feature.description.casefold() == key.casefold():
            logger.debug("Resolved '%s' to feature '%s' by description", key, feature.id)
            return feature.position

    if lowered in ALIASES:
        return _landmark_or_none(ALIASES[lowered], scene, env)

    logger.debug("Target '%s' did not resolve", key)
    return None


def _landmark_or_none(landmark: str, scene: SceneContext, env: EnvContext) -> Optional[np.ndarray]:
    if scene.bounds is None:
        logger.debug("Landmark '%s' requested but scene has no bounds", landmark)
        return None
    return landmark_position(landmark, scene.bounds, env.user_vertical_adjustment)
