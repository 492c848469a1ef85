from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .models import CameraCommand, SceneBounds

logger = logging.getLogger(__name__)

BOUNDING_BOX_VIOLATION = "PATH_VIOLATION_BOUNDING_BOX: Camera position enters object bounds"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    violation_index: Optional[int] = None

    def to_dict(self) -> Dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "violation_index": self.violation_index}


def validate(
    commands: Sequence[CameraCommand],
    object_bounds: Optional[SceneBounds],
    *,
    vertical_adjustment: float = 0.0,
) -> ValidationResult:
    """Reject the trajectory at the first keyframe whose position touches the subject's box.

    Containment is inclusive, so a camera resting exactly on a face fails.
    Without bounds there is nothing to check and the result is valid.
    """
    if object_bounds is None:
        logger.warning("No object bounds given, skipping bounding-box validation")
        return ValidationResult(True)
    box = object_bounds.translated(vertical_adjustment)
    for index, command in enumerate(commands):
        if box.contains(command.position):
            logger.warning("%s at command %d (%s)", BOUNDING_BOX_VIOLATION, index, command.position.round(3))
            return ValidationResult(False, [BOUNDING_BOX_VIOLATION], index)
    logger.debug("Bounding-box validation passed for %d commands", len(commands))
    return ValidationResult(True)
