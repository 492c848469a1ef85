from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .geometry import EPSILON, clamp_position_with_raycast, normalize
from .models import CameraConstraints, EnvContext, SceneContext, as_vector

logger = logging.getLogger(__name__)


def clamp_height(position: np.ndarray, constraints: CameraConstraints) -> np.ndarray:
    p = np.array(position, dtype=float)
    clamped = float(np.clip(p[1], constraints.min_height, constraints.max_height))
    if clamped != p[1]:
        logger.warning("Height %.3f clamped to %.3f", p[1], clamped)
        p[1] = clamped
    return p


def clamp_distance(
    position: np.ndarray,
    anchor: np.ndarray,
    constraints: CameraConstraints,
    start: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Keep ``position`` within the allowed distance band around ``anchor``."""
    p = np.array(position, dtype=float)
    offset = p - anchor
    distance = float(np.linalg.norm(offset))
    if constraints.min_distance <= distance <= constraints.max_distance:
        return p
    direction = normalize(offset)
    if direction is None and start is not None:
        direction = normalize(np.asarray(start, dtype=float) - anchor)
    if direction is None:
        direction = np.array([0.0, 0.0, 1.0])
    wanted = float(np.clip(distance, constraints.min_distance, constraints.max_distance))
    logger.warning("Distance %.3f to anchor clamped to %.3f", distance, wanted)
    return np.asarray(anchor, dtype=float) + direction * wanted


def constrain_position(
    start: np.ndarray,
    candidate: np.ndarray,
    anchor: Optional[np.ndarray],
    scene: SceneContext,
    env: EnvContext,
) -> np.ndarray:
    """Run a proposed camera position through height, distance and bounding-box clamps.

    Height and distance limits are applied first, then the move from
    ``start`` is raycast against the bounds. Limits are re-applied to the
    raycast result; if that pushes the camera back into the box the
    collision-free position wins.
    """
    constraints = env.camera_constraints
    position = np.array(candidate, dtype=float)
    if constraints is not None:
        position = clamp_height(position, constraints)
        if anchor is not None:
            position = clamp_distance(position, anchor, constraints, start)

    safe = clamp_position_with_raycast(start, position, scene.bounds, env.user_vertical_adjustment)
    if constraints is None:
        return safe

    final = clamp_height(safe, constraints)
    if anchor is not None:
        final = clamp_distance(final, anchor, constraints, start)
    if scene.bounds is not None and scene.bounds.translated(env.user_vertical_adjustment).contains(final):
        logger.warning("Camera limits conflict with subject bounds, keeping collision-free position")
        return safe
    if float(np.linalg.norm(final - safe)) < EPSILON:
        return safe
    return as_vector(final)
