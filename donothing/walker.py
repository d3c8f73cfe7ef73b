"""Interactive, step-by-step execution of a procedure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO

from .errors import InputClosedError
from .logging import get_logger
from .render.markdown import StepTemplateData, render_exec_step
from .step import NO_RECURSE, Step, WalkAction

logger = get_logger(__name__)

PROMPT = '\n\n[Enter] to proceed (or "help"): '

HELP_TEXT = """Options:

[Enter]         Proceed to the next step
skip            Skip this step and its descendants
skipto STEP     Skip to the given step by absolute name
help            Print this help message
"""


@dataclass
class PromptResult:
    """What the operator decided to do after a step was presented."""

    # Skip this step and its descendants.
    skip_one: bool = False
    # Absolute name of the next step to present. Empty means carry on normally.
    skip_to: str = ""


class Walker:
    """Presents steps one at a time and waits for the operator between them."""

    def __init__(self, stdin: TextIO, stdout: TextIO):
        self.stdin = stdin
        self.stdout = stdout
        self._skip_to = ""

    def run(self, step: Step) -> None:
        """Walk ``step`` and its descendants, then print "Done."."""
        self._skip_to = ""
        step.walk(self._visit)
        if self._skip_to:
            logger.warning("Never reached step '%s'", self._skip_to)
        self._write("Done.\n")

    def _visit(self, step: Step) -> Optional[WalkAction]:
        abs_name = step.absolute_name()
        if self._skip_to and abs_name != self._skip_to:
            self._write(f"Skipping step '{abs_name}' on the way to '{self._skip_to}'\n")
            return None

        logger.debug("Presenting step '%s'", abs_name)
        self._write(render_exec_step(StepTemplateData.from_step(step, recursive=False)))

        result = self.prompt()
        if result.skip_one:
            self._write(f"Skipping step '{abs_name}' and its descendants\n")
            self._skip_to = ""
            return NO_RECURSE
        self._skip_to = result.skip_to
        if self._skip_to:
            logger.debug("Skipping ahead to '%s'", self._skip_to)
        return None

    def prompt(self) -> PromptResult:
        """Ask the operator what to do next, re-prompting until the answer is valid."""
        while True:
            try:
                entry = self._prompt_once()
            except UnicodeDecodeError as exc:
                self._write(f"Error reading input: {exc}\n")
                continue

            if entry == "":
                return PromptResult()
            if entry == "help":
                self._write(HELP_TEXT)
                continue
            if entry == "skip":
                return PromptResult(skip_one=True)

            parts = entry.split()
            if parts[0] == "skipto":
                if len(parts) != 2:
                    self._write('Invalid \'skipto\' syntax; enter "help" for help\n')
                    continue
                return PromptResult(skip_to=parts[1])

            self._write('Invalid choice; enter "help" for help\n')

    def _prompt_once(self) -> str:
        self._write(PROMPT)
        line = self._read_line()
        self._write("\n")
        if line is None:
            raise InputClosedError("Input stream closed while waiting for a response")
        return self._decode(line).strip()

    def _read_line(self):
        """Read one raw line, or return None at end of input.

        Text streams that wrap a byte buffer are read a line of bytes at a time, so an
        undecodable line doesn't take the lines after it down with it.
        """
        raw = getattr(self.stdin, "buffer", None)
        line = raw.readline() if raw is not None else self.stdin.readline()
        return line or None

    def _decode(self, line) -> str:
        if isinstance(line, str):
            return line
        encoding = getattr(self.stdin, "encoding", None) or "utf-8"
        return line.decode(encoding)

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()
