from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from .models import SceneBounds, as_vector, vector

logger = logging.getLogger(__name__)

WORLD_UP = vector(0.0, 1.0, 0.0)
WORLD_X = vector(1.0, 0.0, 0.0)
EPSILON = 1e-6


def normalize(v: np.ndarray) -> Optional[np.ndarray]:
    """Unit vector along ``v``, or None when ``v`` is degenerate."""
    length = float(np.linalg.norm(v))
    if length < EPSILON or not np.isfinite(length):
        return None
    return np.asarray(v, dtype=float) / length


def camera_axes(view: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(right, up)`` for a camera looking along ``view``.

    ``right = worldUp x view`` with a world-X fallback when the view is
    vertical, ``up = right x view``. Angle signs of pan, tilt, rotate and
    orbit are all expressed against these two axes.
    """
    right = normalize(np.cross(WORLD_UP, view))
    if right is None:
        right = np.array(WORLD_X)
    up = normalize(np.cross(right, view))
    if up is None:
        up = np.array(WORLD_UP)
    return right, up


def horizontal_right(view: np.ndarray) -> np.ndarray:
    """Screen-right direction for sideways travel.

    ``camera_axes`` returns the rotation axis ``worldUp x view``, which points
    to screen-left for a level camera; travel uses its negation.
    """
    right, _ = camera_axes(view)
    return -right


def rotate_vector(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """Rotate ``v`` by ``angle`` radians about ``axis`` (right-hand rule)."""
    unit_axis = normalize(axis)
    if unit_axis is None or angle == 0.0:
        return np.asarray(v, dtype=float).copy()
    return Rotation.from_rotvec(unit_axis * angle).apply(np.asarray(v, dtype=float))


def ray_box_distance(
    origin: np.ndarray, direction: np.ndarray, minimum: np.ndarray, maximum: np.ndarray
) -> Optional[float]:
    """Distance along a unit ``direction`` to the first box hit, slab method."""
    t_min = -np.inf
    t_max = np.inf
    for axis in range(3):
        d = direction[axis]
        if abs(d) < 1e-12:
            if origin[axis] < minimum[axis] or origin[axis] > maximum[axis]:
                return None
            continue
        t1 = (minimum[axis] - origin[axis]) / d
        t2 = (maximum[axis] - origin[axis]) / d
        if t1 > t2:
            t1, t2 = t2, t1
        t_min = max(t_min, t1)
        t_max = min(t_max, t2)
        if t_min > t_max:
            return None
    if t_max < 0:
        return None
    return float(t_min if t_min >= 0 else t_max)


def dynamic_offset(bounds: SceneBounds) -> float:
    """Clearance kept from the box: 5% of the diagonal within [0.1, 0.5]."""
    return max(0.1, min(0.05 * bounds.diagonal, 0.5))


def push_out_of_box(point: np.ndarray, bounds: SceneBounds, offset: float) -> np.ndarray:
    """Move ``point`` through its nearest face and ``offset`` beyond it."""
    p = np.array(point, dtype=float)
    gaps = []
    for axis in range(3):
        gaps.append((p[axis] - bounds.minimum[axis], axis, -1))
        gaps.append((bounds.maximum[axis] - p[axis], axis, 1))
    _, axis, side = min(gaps, key=lambda item: item[0])
    if side < 0:
        p[axis] = bounds.minimum[axis] - offset
    else:
        p[axis] = bounds.maximum[axis] + offset
    return p


def clamp_position_with_raycast(
    start: np.ndarray,
    intended_end: np.ndarray,
    bounds: Optional[SceneBounds],
    vertical_adjustment: float = 0.0,
) -> np.ndarray:
    """Keep a move from entering the vertically adjusted bounding box.

    A path that crosses the box stops ``offset`` short of the hit point. An
    end point inside the box is pushed out through the nearest face. A start
    inside the box skips the path test.
    """
    end = as_vector(intended_end)
    if bounds is None:
        return end
    box = bounds.translated(vertical_adjustment)
    offset = dynamic_offset(box)
    origin = np.asarray(start, dtype=float)

    movement = end - origin
    length = float(np.linalg.norm(movement))
    if length > EPSILON and not box.contains(origin):
        direction = movement / length
        hit = ray_box_distance(origin, direction, box.minimum, box.maximum)
        if hit is not None and hit <= length:
            clamped = origin + direction * max(hit - offset, 0.0)
            logger.debug("Path hits bounds at %.3f of %.3f, stopping at %s", hit, length, clamped.round(3))
            return as_vector(clamped)

    if box.contains(end):
        pushed = push_out_of_box(end, box, offset)
        logger.debug("End point %s inside bounds, pushed to %s", end.round(3), pushed.round(3))
        return as_vector(pushed)
    return end
