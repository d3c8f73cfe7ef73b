"""Markdown rendering of steps.

A document is built from a few small fragment functions (step, inputs, outputs, table of
contents) working on ``StepTemplateData`` projections of the step tree. Text may contain ``@@``
wherever a literal backtick is wanted; ``finish`` turns those into backticks once the whole
document is assembled.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..facts import InputDef, OutputDef
from ..step import Step

BACKTICK_PLACEHOLDER = "@@"
TOC_INDENT = "    "

_ANCHOR_DISALLOWED = re.compile(r"[^0-9a-z\- ]")
_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass
class StepTemplateData:
    """What the fragments need to know about one step."""

    depth: int
    pos: List[int]
    step_name: str
    title: str
    body: str
    inputs: List[InputDef] = field(default_factory=list)
    outputs: List[OutputDef] = field(default_factory=list)
    parent: Optional[StepTemplateData] = field(default=None, repr=False, compare=False)
    children: List[StepTemplateData] = field(default_factory=list)

    @classmethod
    def from_step(
        cls,
        step: Step,
        parent: Optional[StepTemplateData] = None,
        recursive: bool = True,
    ) -> StepTemplateData:
        """Project ``step`` and, if ``recursive``, its whole subtree."""
        data = cls(
            depth=step.depth(),
            pos=step.pos(),
            step_name=step.absolute_name(),
            title=step.short,
            body=step.long,
            inputs=list(step.inputs),
            outputs=list(step.outputs),
            parent=parent,
        )
        if recursive:
            data.children = [cls.from_step(child, data, True) for child in step.children]
        return data

    def section_header(self) -> str:
        """The header line for the step's section, e.g. ``## (0.2) Restore the backup``."""
        parts = ["#" * (self.depth + 1)]
        if self.depth > 0:
            parts.append(f"({'.'.join(str(index) for index in self.pos)})")
        parts.append(self.title)
        return " ".join(parts)

    def anchor(self) -> str:
        return anchor(self.section_header())

    def parent_anchor(self) -> str:
        if self.parent is None:
            return ""
        return self.parent.anchor()

    def toc_indent(self) -> str:
        return TOC_INDENT * (self.depth - 1)


def anchor(header: str) -> str:
    """Return the link target a Markdown renderer generates for ``header``.

    This follows GitHub's header slugging: ``### (2.1) Blah blah! Blah.`` becomes
    ``#21-blah-blah-blah``.
    """
    slug = header.lower().lstrip("#").lstrip(" ")
    slug = _ANCHOR_DISALLOWED.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    return f"#{slug}"


def render_inputs(inputs: List[InputDef]) -> str:
    """The "**Inputs**" block of a step. Never ends with a newline."""
    if not inputs:
        return ""
    lines = ["**Inputs**:", ""]
    lines.extend(f"  - @@{input_def.name}@@" for input_def in inputs)
    return "\n".join(lines)


def render_outputs(outputs: List[OutputDef]) -> str:
    """The "**Outputs**" block of a step. Never ends with a newline."""
    if not outputs:
        return ""
    lines = ["**Outputs**:", ""]
    lines.extend(
        f"  - @@{output_def.name}@@ ({output_def.value_type.value}): {output_def.short}"
        for output_def in outputs
    )
    return "\n".join(lines)


def render_table_of_contents(entries: List[StepTemplateData]) -> str:
    lines: List[str] = []
    for entry in entries:
        line = f"{entry.toc_indent()}- [{entry.title}]({entry.anchor()})"
        if entry.children:
            line += "\n" + render_table_of_contents(entry.children)
        lines.append(line)
    return "\n".join(lines)


def render_step(data: StepTemplateData) -> str:
    """A step's section followed by the sections of all its descendants."""
    out = data.section_header()
    parent_anchor = data.parent_anchor()
    if parent_anchor:
        out += f"\n\n@@{data.step_name}@@\n•\n[Up]({parent_anchor})"
    if data.body:
        out += "\n\n" + data.body
    if data.inputs:
        out += "\n\n" + render_inputs(data.inputs)
    if data.outputs:
        out += "\n\n" + render_outputs(data.outputs)
    if data.depth == 0:
        out += "\n\n" + render_table_of_contents(data.children)
    for child in data.children:
        out += "\n\n" + render_step(child)
    return out


def render_document(data: StepTemplateData) -> str:
    return finish(render_step(data) + "\n")


def render_exec_step(data: StepTemplateData) -> str:
    """A step as shown while executing: header and body only."""
    out = data.section_header()
    if data.body:
        out += "\n\n" + data.body
    return finish(out)


def finish(text: str) -> str:
    return text.replace(BACKTICK_PLACEHOLDER, "`")
