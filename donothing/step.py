"""The step tree that procedures are built from."""

from __future__ import annotations

import os
from enum import Enum
from typing import Callable, List, Optional

from .errors import TreeCorruptionError
from .facts import InputDef, OutputDef, ValueType

NAME_SEPARATOR = "."


class WalkAction(Enum):
    CONTINUE = "continue"
    NO_RECURSE = "no_recurse"


# Returned from a walk visitor to leave the current step's children unvisited.
NO_RECURSE = WalkAction.NO_RECURSE


class StopWalk(Exception):
    """Raised by a walk visitor to end the walk early without signalling failure."""


Visitor = Callable[["Step"], Optional[WalkAction]]


class Step:
    """An individual action to be performed as part of a procedure.

    Steps need a name, unique among their siblings, and a short description. They may also have
    a long description, substeps (added with ``add_step``) and declared inputs and outputs. An
    output declared by one step can be referenced as an input by any later step.

    Each step has an absolute name made of the names of its ancestors and its own name, joined
    with dots: ``root.restoreBackup.loadData`` is the ``loadData`` child of ``restoreBackup``.
    """

    def __init__(self, name: str = "", parent: Optional[Step] = None):
        self._name = name
        self._short = ""
        self._long = ""
        self.inputs: List[InputDef] = []
        self.outputs: List[OutputDef] = []
        self.parent = parent
        self.children: List[Step] = []

    def __repr__(self) -> str:
        return f"Step({self.absolute_name()!r})"

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def short(self) -> str:
        """The step's title; used as its section heading in rendered documentation."""
        return self._short

    @short.setter
    def short(self, value: str) -> None:
        self._short = value

    @property
    def long(self) -> str:
        """The body of the step's instructions.

        Leading and trailing blank lines are dropped and the indentation shared by every
        non-blank line is removed, so bodies can be written as indented triple-quoted strings.
        """
        return self._long

    @long.setter
    def long(self, value: str) -> None:
        self._long = trim_common_indent(strip_blank_lines(value))

    def add_step(self, configure: Callable[[Step], None]) -> Step:
        """Add a child step, defined by ``configure``.

        The new step is passed to ``configure`` before it's attached, so any substeps added
        inside ``configure`` are complete by the time this returns. Returns the new step, which
        lets ``add_step`` be used as a decorator.
        """
        child = Step(parent=self)
        configure(child)
        self.children.append(child)
        return child

    def output_string(self, name: str, desc: str) -> None:
        """Declare a string output.

        ``desc`` is a concise description of the value, shown in the rendered documentation.
        """
        self.outputs.append(OutputDef(ValueType.STRING, name, desc))

    def output_int(self, name: str, desc: str) -> None:
        self.outputs.append(OutputDef(ValueType.INT, name, desc))

    def input_string(self, name: str, required: bool = True, short: str = "") -> None:
        """Declare a string input, which must match a string output of an earlier step."""
        self.inputs.append(InputDef(ValueType.STRING, name, required, short))

    def input_int(self, name: str, required: bool = True, short: str = "") -> None:
        self.inputs.append(InputDef(ValueType.INT, name, required, short))

    def absolute_name(self) -> str:
        if self.parent is None:
            return self._name
        return self.parent.absolute_name() + NAME_SEPARATOR + self._name

    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def pos(self) -> List[int]:
        """Index of this step within each ancestor's children, from the top down.

        The root step's position is empty. The first grandchild of the root's second child is at
        ``[1, 0]``.
        """
        path: List[int] = []
        node = self
        while node.parent is not None:
            index = _index_by_identity(node.parent.children, node)
            if index is None:
                raise TreeCorruptionError(
                    f"Step '{node.absolute_name()}' is missing from its parent's children"
                )
            path.append(index)
            node = node.parent
        path.reverse()
        return path

    def walk(self, visit: Visitor) -> None:
        """Visit this step and its descendants, depth first.

        The step itself is visited first, then each child's subtree in order. This is the order
        in which steps are executed, numbered and rendered. If ``visit`` returns ``NO_RECURSE``
        the step's children are skipped; if it raises, the walk stops and the exception
        propagates.
        """
        if visit(self) is NO_RECURSE:
            return
        for child in self.children:
            child.walk(visit)


def _index_by_identity(steps: List[Step], target: Step) -> Optional[int]:
    for index, step in enumerate(steps):
        if step is target:
            return index
    return None


def strip_blank_lines(text: str) -> str:
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def trim_common_indent(text: str) -> str:
    """Remove the leading whitespace shared by every non-blank line of ``text``.

    Blank lines don't count toward the shared prefix and come out empty. Relative indentation,
    including tabs that follow the shared prefix, is preserved.
    """
    lines = text.split("\n")
    indents = [_leading_whitespace(line) for line in lines if line.strip()]
    if not indents:
        return "\n".join("" if not line.strip() else line for line in lines)
    prefix = os.path.commonprefix(indents)

    trimmed: List[str] = []
    for line in lines:
        if not line.strip():
            trimmed.append("")
        else:
            trimmed.append(line[len(prefix):])
    return "\n".join(trimmed)


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]
