"""Translate keyframes into ``setLookAt`` calls for an orbit-style camera-control widget."""
from __future__ import annotations

from typing import Dict, List, Sequence

from .models import CameraCommand


def to_control_instruction(command: CameraCommand) -> Dict:
    px, py, pz = command.position.tolist()
    tx, ty, tz = command.target.tolist()
    return {
        "method": "setLookAt",
        # last arg: enableTransition, false snaps instantly
        "args": [px, py, pz, tx, ty, tz, command.duration > 0],
        "duration": command.duration,
        "easing": command.easing,
    }


def to_control_instructions(commands: Sequence[CameraCommand]) -> List[Dict]:
    return [to_control_instruction(command) for command in commands]
