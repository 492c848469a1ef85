from __future__ import annotations

import math
from typing import Callable, Dict, Optional

DEFAULT_EASING = "easeInOutQuad"

_BACK = 1.70158


def _linear(t: float) -> float:
    return t


def _in_quad(t: float) -> float:
    return t * t


def _out_quad(t: float) -> float:
    return t * (2.0 - t)


def _in_out_quad(t: float) -> float:
    return 2.0 * t * t if t < 0.5 else 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0


def _in_cubic(t: float) -> float:
    return t ** 3


def _out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


def _in_out_cubic(t: float) -> float:
    return 4.0 * t ** 3 if t < 0.5 else 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


def _in_expo(t: float) -> float:
    return 0.0 if t <= 0.0 else 2.0 ** (10.0 * t - 10.0)


def _out_expo(t: float) -> float:
    return 1.0 if t >= 1.0 else 1.0 - 2.0 ** (-10.0 * t)


def _in_out_expo(t: float) -> float:
    if t <= 0.0 or t >= 1.0:
        return t
    if t < 0.5:
        return 2.0 ** (20.0 * t - 10.0) / 2.0
    return (2.0 - 2.0 ** (-20.0 * t + 10.0)) / 2.0


def _in_circle(t: float) -> float:
    return 1.0 - math.sqrt(1.0 - t * t)


def _out_circle(t: float) -> float:
    return math.sqrt(1.0 - (t - 1.0) ** 2)


def _in_out_circle(t: float) -> float:
    if t < 0.5:
        return (1.0 - math.sqrt(1.0 - (2.0 * t) ** 2)) / 2.0
    return (math.sqrt(1.0 - (-2.0 * t + 2.0) ** 2) + 1.0) / 2.0


def _in_back(t: float) -> float:
    return (_BACK + 1.0) * t ** 3 - _BACK * t * t


def _out_back(t: float) -> float:
    return 1.0 + (_BACK + 1.0) * (t - 1.0) ** 3 + _BACK * (t - 1.0) ** 2


EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "linear": _linear,
    "easeInQuad": _in_quad,
    "easeOutQuad": _out_quad,
    "easeInOutQuad": _in_out_quad,
    "easeInCubic": _in_cubic,
    "easeOutCubic": _out_cubic,
    "easeInOutCubic": _in_out_cubic,
    "easeInExpo": _in_expo,
    "easeOutExpo": _out_expo,
    "easeInOutExpo": _in_out_expo,
    "easeInCircle": _in_circle,
    "easeOutCircle": _out_circle,
    "easeInOutCircle": _in_out_circle,
    "easeInBack": _in_back,
    "easeOutBack": _out_back,
}

SPEED_EASINGS: Dict[str, str] = {
    "very_fast": "linear",
    "fast": "easeOutQuad",
    "slow": "easeInOutQuad",
}


def is_valid_easing(name: object) -> bool:
    return isinstance(name, str) and name in EASING_FUNCTIONS


def easing_function(name: str) -> Callable[[float], float]:
    return EASING_FUNCTIONS.get(name, _in_out_quad)


def resolve_easing(explicit: Optional[str], speed: Optional[str], default: str = DEFAULT_EASING) -> str:
    """Pick the easing for a step.

    A valid explicit name wins. Otherwise the speed hint decides, and
    ``medium`` or an unknown speed falls back to ``default``.
    """
    if is_valid_easing(explicit):
        return explicit
    if isinstance(speed, str):
        mapped = SPEED_EASINGS.get(speed.strip().lower())
        if mapped is not None:
            return mapped
    return default if is_valid_easing(default) else DEFAULT_EASING
