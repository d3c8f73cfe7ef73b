"""A default command-line interface for do-nothing scripts.

Scripts that build a ``Procedure`` can hand ``sys.argv`` to ``handle_args`` instead of writing
their own argument handling. Those that want something different can call
``Procedure.execute_step``, ``Procedure.render_step`` and friends directly.
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from typing import List, NoReturn, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .errors import CheckError, ProcedureError, UsageError
from .logging import DEFAULT_LEVEL, configure_logging, get_logger
from .procedure import Procedure
from .render.highlight import highlight_markdown

logger = get_logger(__name__)

LOG_LEVEL_ENV = "DONOTHING_LOG_LEVEL"

OPTIONS_TEXT = """OPTIONS:
    --markdown    Instead of executing the procedure, print its Markdown documentation to stdout
    --check       Check the procedure for problems and exit
    --color       Highlight Markdown output for the terminal
    --verbose     Log debug information to stderr
    --help        Print usage message"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser(exec_name: str) -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=exec_name, add_help=False, allow_abbrev=False)
    parser.add_argument("step_names", nargs="*")
    parser.add_argument("--markdown", action="store_true")
    parser.add_argument("--check", action="store_true")
    parser.add_argument("--color", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser


class DefaultCLI:
    """Runs a procedure according to command-line arguments.

    ``default_step`` is the step to act on when the invocation doesn't name one; when it's
    empty, STEP_NAME is required.
    """

    def __init__(
        self,
        exec_name: str,
        procedure: Procedure,
        default_step: str = "",
        out: Optional[TextIO] = None,
    ):
        if procedure is None:
            raise ValueError("failed to initialize default CLI: procedure must not be None")
        self.exec_name = exec_name
        self.procedure = procedure
        self.default_step = default_step
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def usage(self) -> str:
        step_arg = "[STEP_NAME]" if self.default_step else "STEP_NAME"
        parts = [f"USAGE: {self.exec_name} [options] {step_arg}", ""]
        if self.procedure.short:
            parts.extend([self.procedure.short, ""])
        parts.append(OPTIONS_TEXT)
        return "\n".join(parts)

    def run(self, args: List[str]) -> int:
        """Parse ``args`` (the whole of ``sys.argv``) and do what they ask.

        Returns the process exit code. Raises ``UsageError`` for invalid invocations, after
        printing the usage message.
        """
        if not args:
            raise UsageError("Must have at least 1 argument")

        # Help wins over everything else on the command line, valid or not.
        if any(arg in ("-h", "--help") for arg in args[1:]):
            self._print_usage()
            return 0

        parser = _build_parser(self.exec_name)
        try:
            opts = parser.parse_args(args[1:])
        except UsageError:
            self._print_usage()
            raise

        level = "DEBUG" if opts.verbose else os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL)
        if not isinstance(logging.getLevelName(level.upper()), int):
            raise UsageError(f"Invalid log level '{level}' in {LOG_LEVEL_ENV}")
        configure_logging(level)

        if len(opts.step_names) > 1:
            self._print_usage()
            raise UsageError(f"Extraneous arguments passed: {opts.step_names[1:]}")

        if opts.check:
            return self._print_problems()

        if not opts.step_names and not self.default_step:
            self._print_usage()
            raise UsageError("Must specify STEP_NAME")
        step_name = opts.step_names[0] if opts.step_names else self.default_step

        if opts.markdown:
            buf = io.StringIO()
            self.procedure.render_step(buf, step_name)
            text = buf.getvalue()
            self.out.write(highlight_markdown(text) if opts.color else text)
            return 0

        self.procedure.execute_step(step_name)
        return 0

    def _print_usage(self) -> None:
        self.out.write(self.usage() + "\n")

    def _print_problems(self) -> int:
        console = Console(file=self.out, highlight=False)
        problems = self.procedure.check()
        if not problems:
            console.print("No problems found.", markup=False)
            return 0

        table = Table(title="Problems")
        table.add_column("#", justify="right")
        table.add_column("Problem")
        for index, problem in enumerate(problems, start=1):
            table.add_row(str(index), Text(problem))
        console.print(table)
        return 1


def handle_args(args: List[str], procedure: Procedure, default_step: str = "") -> int:
    """Run the default CLI against ``procedure``, returning an exit code.

    ``args`` is the content of ``sys.argv``; the executable name is taken from its first item.
    """
    if not args:
        print("Error: Failed to determine executable name from arguments")
        return 1
    try:
        cli = DefaultCLI(os.path.basename(args[0]), procedure, default_step)
        return cli.run(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 1
    except CheckError as exc:
        print(f"Error: {exc}")
        for problem in exc.problems:
            print(f"  - {problem}")
        return 1
    except ProcedureError as exc:
        logger.debug("Procedure failed", exc_info=True)
        print(f"Error: {exc}")
        return 1
