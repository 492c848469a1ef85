from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

from .errors import PlanParsingError
from .models import CameraCommand, CameraState, EnvContext, MotionPlan, SceneContext


@dataclass(frozen=True)
class MotionRequest:
    """Everything one interpretation run needs, as read from disk."""

    plan: MotionPlan
    scene: SceneContext
    env: EnvContext
    camera: CameraState


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PlanParsingError(f"{path} is not valid JSON: {exc}") from exc


def read_yaml(path: Path) -> Any:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def load_request(path: Path) -> MotionRequest:
    """Load a request file with ``plan``, ``scene``, ``env`` and ``camera`` sections.

    JSON is the wire format; ``.yaml``/``.yml`` files are accepted too.
    """
    path = Path(path)
    raw = read_yaml(path) if path.suffix in (".yaml", ".yml") else read_json(path)
    if not isinstance(raw, dict):
        raise PlanParsingError(f"{path} must contain an object at the top level")
    for key in ("plan", "camera"):
        if key not in raw:
            raise PlanParsingError(f"{path} is missing the '{key}' section")
    return MotionRequest(
        plan=MotionPlan.from_dict(raw["plan"]),
        scene=SceneContext.from_dict(raw.get("scene")),
        env=EnvContext.from_dict(raw.get("env")),
        camera=CameraState.from_dict(raw["camera"]),
    )


def dump_commands(path: Path, commands: Iterable[CameraCommand], extra: Dict[str, Any] | None = None) -> None:
    payload: Dict[str, Any] = {"commands": [command.to_dict() for command in commands]}
    if extra:
        payload.update(extra)
    write_json(Path(path), payload)
