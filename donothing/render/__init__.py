"""Rendering of procedures to Markdown."""

from .highlight import highlight_markdown
from .markdown import (
    StepTemplateData,
    anchor,
    render_document,
    render_exec_step,
    render_inputs,
    render_outputs,
    render_step,
    render_table_of_contents,
)

__all__ = [
    "StepTemplateData",
    "anchor",
    "highlight_markdown",
    "render_document",
    "render_exec_step",
    "render_inputs",
    "render_outputs",
    "render_step",
    "render_table_of_contents",
]
