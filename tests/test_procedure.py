import io
import sys
from pathlib import Path
import unittest
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from donothing.errors import StepNotFoundError
from donothing.procedure import Procedure
from donothing.step import Step


def _procedure() -> Procedure:
    pcd = Procedure()
    pcd.short = "The stanky leg"

    @pcd.add_step
    def maximize(step: Step) -> None:
        step.name = "maximizeStank"
        step.short = "Maximize leg stankiness"

    @pcd.add_step
    def repeat(step: Step) -> None:
        step.name = "repeat"
        step.short = "Repeat"

    return pcd


class TestProcedure(unittest.TestCase):
    def test_get_step_by_name(self):
        pcd = _procedure()
        for name in ("root", "root.maximizeStank", "root.repeat"):
            with self.subTest(name=name):
                self.assertEqual(pcd.get_step_by_name(name).absolute_name(), name)

    def test_get_step_by_name_missing(self):
        with self.assertRaises(StepNotFoundError) as ctx:
            _procedure().get_step_by_name("root.nonexistentStep")
        self.assertIsInstance(ctx.exception, LookupError)
        self.assertEqual(str(ctx.exception), "No step with name 'root.nonexistentStep'")

    def test_short_and_long_live_on_root_step(self):
        pcd = Procedure()
        pcd.short = "Title"
        pcd.long = """
            Overview of the procedure.
        """
        self.assertEqual(pcd.root_step.short, "Title")
        self.assertEqual(pcd.long, "Overview of the procedure.")

    def test_streams_default_to_process_streams(self):
        pcd = Procedure()
        fake_out = io.StringIO()
        with mock.patch.object(sys, "stdout", fake_out):
            self.assertIs(pcd.stdout, fake_out)
        self.assertIs(pcd.stdin, sys.stdin)

        replacement = io.StringIO()
        pcd.stdin = replacement
        self.assertIs(pcd.stdin, replacement)


if __name__ == "__main__":
    unittest.main()
