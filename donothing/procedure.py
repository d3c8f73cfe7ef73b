"""Procedures: step trees that can be checked, rendered to Markdown and executed."""

from __future__ import annotations

import sys
from typing import Callable, List, Optional, TextIO

from .checker import check_procedure
from .errors import CheckError, StepNotFoundError
from .logging import get_logger
from .render.markdown import StepTemplateData, render_document
from .step import StopWalk, Step
from .walker import Walker

logger = get_logger(__name__)

ROOT_STEP_NAME = "root"


class Procedure:
    """A tree of steps that can be executed or rendered to Markdown.

    ``stdin`` and ``stdout`` are the streams used by ``execute``; they default to the process's
    standard streams.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.root_step = Step(name=ROOT_STEP_NAME)
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @stdin.setter
    def stdin(self, stream: TextIO) -> None:
        self._stdin = stream

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @stdout.setter
    def stdout(self, stream: TextIO) -> None:
        self._stdout = stream

    @property
    def short(self) -> str:
        """The procedure's title, which is also the title of its Markdown document."""
        return self.root_step.short

    @short.setter
    def short(self, value: str) -> None:
        self.root_step.short = value

    @property
    def long(self) -> str:
        """An overview of the procedure's purpose and the assumptions it makes.

        It's shown when execution starts and opens the Markdown document.
        """
        return self.root_step.long

    @long.setter
    def long(self, value: str) -> None:
        self.root_step.long = value

    def add_step(self, configure: Callable[[Step], None]) -> Step:
        return self.root_step.add_step(configure)

    def get_step_by_name(self, step_name: str) -> Step:
        """Return the step with the given absolute name."""
        found: List[Step] = []

        def visit(step: Step) -> None:
            if step.absolute_name() == step_name:
                found.append(step)
                raise StopWalk()

        try:
            self.root_step.walk(visit)
        except StopWalk:
            pass
        if not found:
            raise StepNotFoundError(step_name)
        logger.debug("Resolved step '%s'", step_name)
        return found[0]

    def check(self) -> List[str]:
        """Return the list of problems in the procedure; empty when it's consistent."""
        return check_procedure(self.root_step)

    def validate(self) -> None:
        """Raise ``CheckError`` listing every problem if the procedure isn't consistent."""
        problems = self.check()
        if problems:
            raise CheckError(problems)

    def render(self, out: TextIO) -> None:
        """Write the whole procedure to ``out`` as Markdown.

        Any ``@@`` in the rendered text comes out as a backtick.
        """
        self.render_step(out, ROOT_STEP_NAME)

    def render_step(self, out: TextIO, step_name: str) -> None:
        """Write the named step and its descendants to ``out`` as Markdown."""
        self.validate()
        step = self.get_step_by_name(step_name)
        logger.debug("Rendering step '%s'", step_name)
        out.write(render_document(StepTemplateData.from_step(step)))

    def execute(self) -> None:
        """Run through the whole procedure, prompting the operator after each step."""
        self.execute_step(ROOT_STEP_NAME)

    def execute_step(self, step_name: str) -> None:
        """Run through the named step and its descendants.

        The whole procedure is checked first, not just the named subtree.
        """
        self.validate()
        step = self.get_step_by_name(step_name)
        logger.debug("Executing step '%s'", step_name)
        Walker(self.stdin, self.stdout).run(step)
