"""Input and output declarations attached to steps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValueType(Enum):
    STRING = "string"
    INT = "int"


@dataclass(frozen=True)
class InputDef:
    """A value that a step consumes.

    The name must match an output of some step that comes earlier in the procedure.
    """

    value_type: ValueType
    name: str
    required: bool = True
    short: str = ""


@dataclass(frozen=True)
class OutputDef:
    """A value that a step produces, for use as an input by later steps."""

    value_type: ValueType
    name: str
    short: str
