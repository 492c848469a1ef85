from __future__ import annotations

import pytest

from camera_motion.handlers import StepContext
from camera_motion.models import CameraState, EnvContext, SceneBounds, SceneContext, vector


@pytest.fixture
def unit_bounds() -> SceneBounds:
    return SceneBounds(vector(-1.0, -1.0, -1.0), vector(1.0, 1.0, 1.0))


@pytest.fixture
def scene(unit_bounds) -> SceneContext:
    return SceneContext(bounds=unit_bounds)


@pytest.fixture
def env() -> EnvContext:
    return EnvContext()


@pytest.fixture
def state() -> CameraState:
    """Camera five units out on +Z looking at the origin."""
    return CameraState(vector(0.0, 0.0, 5.0), vector(0.0, 0.0, 0.0))


@pytest.fixture
def ctx() -> StepContext:
    return StepContext(duration=2.0)
