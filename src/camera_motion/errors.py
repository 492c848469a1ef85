from __future__ import annotations

from typing import Any


class MotionInterpreterError(Exception):
    """Base class for every error raised by the interpreter."""

    def __init__(self, message: str, context: Any = None) -> None:
        super().__init__(message)
        self.context = context


class InvalidPlanError(MotionInterpreterError):
    """The plan cannot be interpreted at all (no steps, bad duration)."""


class PlanParsingError(MotionInterpreterError):
    """A plan, scene or environment payload is structurally malformed."""


class ConfigurationError(MotionInterpreterError):
    """An interpreter setting is outside its accepted range."""


class StepParameterError(MotionInterpreterError):
    """A single step is unusable; the interpreter skips it and carries state forward."""

    def __init__(self, message: str, context: Any = None, *, primitive: str | None = None) -> None:
        super().__init__(message, context)
        self.primitive = primitive


class UnresolvedTargetError(StepParameterError):
    """A named target could not be mapped to a point in the scene."""

    def __init__(self, name: str, *, primitive: str | None = None) -> None:
        super().__init__(f"Could not resolve target '{name}'", name, primitive=primitive)
        self.name = name


class UnsupportedPrimitiveError(StepParameterError):
    """The step type has no registered handler."""
