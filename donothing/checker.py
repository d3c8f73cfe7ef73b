"""Consistency checks for a procedure's step tree."""

from __future__ import annotations

from typing import Dict, List, Set

from .facts import OutputDef
from .logging import get_logger
from .step import NAME_SEPARATOR, Step

logger = get_logger(__name__)


def check_procedure(root: Step) -> List[str]:
    """Return every problem found in the tree under ``root``.

    The expectations are:

      1. Every step has a unique absolute name with no empty parts.
      2. Every step has a short description.
      3. Every input names an output of a step that comes before it in depth-first order, and
         has the same type as that output.

    An output only counts for steps visited after the one declaring it, so a step can't consume
    its own outputs.
    """
    seen_names: Set[str] = set()
    outputs: Dict[str, OutputDef] = {}
    problems: List[str] = []

    def visit(step: Step) -> None:
        abs_name = step.absolute_name()
        if not abs_name or abs_name.endswith(NAME_SEPARATOR):
            if step.parent is None:
                problems.append("Root step does not have name")
            else:
                problems.append(
                    f"Child step of '{step.parent.absolute_name()}' does not have name"
                )

        if abs_name in seen_names:
            problems.append(f"More than one step with name '{abs_name}'")
        seen_names.add(abs_name)

        if not step.short:
            problems.append(f"Step '{abs_name}' has no Short value")

        for input_def in step.inputs:
            output_def = outputs.get(input_def.name)
            if output_def is None:
                problems.append(
                    f"Input '{input_def.name}' of step '{abs_name}' does not refer to an "
                    "output from any previous step"
                )
                continue
            if output_def.value_type != input_def.value_type:
                problems.append(
                    f"Input '{input_def.name}' of step '{abs_name}' has type "
                    f"'{input_def.value_type.value}', but output '{output_def.name}' has type "
                    f"'{output_def.value_type.value}'"
                )

        for output_def in step.outputs:
            outputs[output_def.name] = output_def

    root.walk(visit)
    logger.debug("Checked %d step names, found %d problems", len(seen_names), len(problems))
    return problems
