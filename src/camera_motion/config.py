from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .easing import DEFAULT_EASING, is_valid_easing
from .errors import ConfigurationError
from .files import read_yaml


@dataclass
class InterpreterConfig:
    default_easing: str = DEFAULT_EASING
    duration_tolerance: float = 1e-4
    orbit_step_degrees: float = 2.0
    instant_cut_duration: float = 0.01
    move_to_offset: List[float] = field(default_factory=lambda: [0.0, 0.5, 1.5])
    max_velocity: Optional[float] = None

    def __post_init__(self) -> None:
        if not is_valid_easing(self.default_easing):
            raise ConfigurationError(f"Unknown default_easing '{self.default_easing}'")
        if not self.duration_tolerance > 0:
            raise ConfigurationError("duration_tolerance must be positive")
        if not 2.0 <= self.orbit_step_degrees <= 45.0:
            raise ConfigurationError(
                f"orbit_step_degrees must lie in [2, 45], got {self.orbit_step_degrees}"
            )
        if not self.instant_cut_duration > 0:
            raise ConfigurationError("instant_cut_duration must be positive")
        if len(self.move_to_offset) != 3 or not all(math.isfinite(float(v)) for v in self.move_to_offset):
            raise ConfigurationError("move_to_offset must hold three finite numbers")
        self.move_to_offset = [float(v) for v in self.move_to_offset]
        if self.max_velocity is not None and not self.max_velocity > 0:
            raise ConfigurationError("max_velocity must be positive when set")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> InterpreterConfig:
        if not payload:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigurationError(f"Unknown interpreter settings: {', '.join(unknown)}")
        try:
            return cls(**dict(payload))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid interpreter settings: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config(path: Path) -> InterpreterConfig:
    """Read an ``interpreter:`` section (or a bare mapping) from a YAML file."""
    raw = read_yaml(Path(path)) or {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{path} does not contain a mapping")
    section = raw.get("interpreter", raw)
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"'interpreter' section in {path} is not a mapping")
    return InterpreterConfig.from_dict(section)
