"""Build do-nothing scripts: procedures that are documented, checked and walked step by step."""

from .cli import DefaultCLI, handle_args
from .errors import (
    CheckError,
    InputClosedError,
    ProcedureError,
    StepNotFoundError,
    TreeCorruptionError,
    UsageError,
)
from .facts import InputDef, OutputDef, ValueType
from .procedure import Procedure
from .step import NO_RECURSE, Step, StopWalk, WalkAction

__all__ = [
    "CheckError",
    "DefaultCLI",
    "InputClosedError",
    "InputDef",
    "NO_RECURSE",
    "OutputDef",
    "Procedure",
    "ProcedureError",
    "Step",
    "StepNotFoundError",
    "StopWalk",
    "TreeCorruptionError",
    "UsageError",
    "ValueType",
    "WalkAction",
    "handle_args",
]
