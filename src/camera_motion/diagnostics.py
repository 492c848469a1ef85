from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    severity: str
    message: str
    step_index: Optional[int] = None
    primitive: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


class Diagnostics:
    """Per-run record of what the interpreter skipped, clamped or could not honour."""

    def __init__(self) -> None:
        self.entries: List[Diagnostic] = []

    def record(
        self,
        severity: str,
        message: str,
        *,
        step_index: Optional[int] = None,
        primitive: Optional[str] = None,
    ) -> Diagnostic:
        entry = Diagnostic(severity, message, step_index, primitive)
        self.entries.append(entry)
        prefix = f"step {step_index} ({primitive}): " if step_index is not None else ""
        logger.log(_LEVELS.get(severity, logging.INFO), "%s%s", prefix, message)
        return entry

    def warning(self, message: str, **where) -> Diagnostic:
        return self.record("warning", message, **where)

    def by_severity(self, severity: str) -> List[Diagnostic]:
        return [entry for entry in self.entries if entry.severity == severity]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
