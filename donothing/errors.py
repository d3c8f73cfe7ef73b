"""Exceptions raised by procedure checking, rendering and execution."""

from __future__ import annotations

from typing import List, Optional


class ProcedureError(Exception):
    """Base class for user-facing procedure errors."""


class CheckError(ProcedureError):
    """The procedure failed its consistency check.

    ``problems`` holds every problem found, not just the first one.
    """

    def __init__(self, problems: List[str], message: Optional[str] = None):
        super().__init__(message or "Problems were found in the procedure")
        self.problems = list(problems)


class StepNotFoundError(ProcedureError, LookupError):
    def __init__(self, step_name: str):
        super().__init__(f"No step with name '{step_name}'")
        self.step_name = step_name


class InputClosedError(ProcedureError):
    """The operator's input stream ended while a step was waiting for a response."""


class UsageError(ProcedureError):
    pass


class TreeCorruptionError(RuntimeError):
    """A step's position can't be derived from its ancestors.

    Only code that edits ``children`` lists directly can cause this, so it is not a
    ``ProcedureError``.
    """
