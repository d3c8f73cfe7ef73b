import io
import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from donothing.errors import CheckError, InputClosedError, StepNotFoundError
from donothing.procedure import Procedure
from donothing.step import Step
from donothing.walker import HELP_TEXT, PROMPT


def _run(pcd: Procedure, answers: str, step_name: str = "root") -> str:
    pcd.stdin = io.StringIO(answers)
    pcd.stdout = io.StringIO()
    pcd.execute_step(step_name)
    return pcd.stdout.getvalue()


def _linear(*names: str) -> Procedure:
    pcd = Procedure()
    pcd.short = "Linear"
    for name in names:

        def configure(step: Step, name: str = name) -> None:
            step.name = name
            step.short = f"Short {name}"
            step.long = f"Long {name}"

        pcd.add_step(configure)
    return pcd


class TestExecute(unittest.TestCase):
    def test_single_step(self):
        pcd = Procedure()
        pcd.short = "root step"
        pcd.long = "blah blah blah\n\nthis is @@all@@ very interesting to you"

        output = _run(pcd, "\n")

        self.assertEqual(
            output,
            "# root step\n\nblah blah blah\n\nthis is `all` very interesting to you"
            + PROMPT
            + "\nDone.\n",
        )

    def test_nested_steps_in_order(self):
        pcd = Procedure()
        pcd.short = "short 0"
        pcd.long = "long 0"

        @pcd.add_step
        def child(step: Step) -> None:
            step.name = "childStep"
            step.short = "short 1"
            step.long = "long 1"

            @step.add_step
            def grandchild(sub: Step) -> None:
                sub.name = "grandchildStep"
                sub.short = "short 2"
                sub.long = "long 2"
                sub.output_string("ignored", "Outputs aren't shown while executing")

        output = _run(pcd, "\n\n\n")

        positions = [output.index(f"long {n}") for n in range(3)]
        self.assertEqual(positions, sorted(positions))
        self.assertIn("### (0.0) short 2", output)
        self.assertNotIn("**Outputs**", output)
        self.assertEqual(output.count(PROMPT), 3)
        self.assertTrue(output.endswith("Done.\n"))

    def test_skip_prunes_descendants(self):
        pcd = Procedure()
        pcd.short = "Skipping"

        @pcd.add_step
        def first(step: Step) -> None:
            step.name = "stepOne"
            step.short = "Step one"
            for name in ("childA", "childB"):
                step.add_step(
                    lambda s, name=name: (setattr(s, "name", name), setattr(s, "short", name))
                )

        @pcd.add_step
        def second(step: Step) -> None:
            step.name = "stepTwo"
            step.short = "Step two"

        output = _run(pcd, "\nskip\n\n")

        self.assertIn("Skipping step 'root.stepOne' and its descendants\n", output)
        self.assertNotIn("childA", output)
        self.assertNotIn("childB", output)
        self.assertLess(
            output.index("and its descendants"), output.index("## (1) Step two")
        )
        self.assertEqual(output.count(PROMPT), 3)

    def test_skipto_jumps_ahead(self):
        pcd = _linear("stepA", "stepB", "stepC", "stepD")

        output = _run(pcd, "\nskipto root.stepC\n\n\n")

        self.assertIn("Skipping step 'root.stepB' on the way to 'root.stepC'\n", output)
        self.assertNotIn("Short stepB", output)
        self.assertIn("## (2) Short stepC\n\nLong stepC", output)
        self.assertIn("## (3) Short stepD", output)
        self.assertEqual(output.count(PROMPT), 4)

    def test_skipto_skips_descendants_of_passed_steps(self):
        pcd = _linear("stepA", "stepB")
        pcd.root_step.children[0].add_step(
            lambda s: (setattr(s, "name", "inner"), setattr(s, "short", "Inner"))
        )

        output = _run(pcd, "skipto root.stepB\n\n")

        self.assertIn("Skipping step 'root.stepA' on the way to 'root.stepB'", output)
        self.assertIn("Skipping step 'root.stepA.inner' on the way to 'root.stepB'", output)
        self.assertIn("Long stepB", output)

    def test_help_and_invalid_choices_reprompt(self):
        pcd = _linear("stepA")

        output = _run(pcd, "help\nbogus\nskipto\nskipto a b\n\n\n")

        self.assertIn(HELP_TEXT, output)
        self.assertIn('Invalid choice; enter "help" for help\n', output)
        self.assertEqual(output.count("Invalid 'skipto' syntax"), 2)
        self.assertEqual(output.count(PROMPT), 6)
        self.assertIn("Long stepA", output)
        self.assertTrue(output.endswith("Done.\n"))

    def test_execute_subtree(self):
        pcd = _linear("stepA", "stepB")

        output = _run(pcd, "\n", step_name="root.stepB")

        self.assertNotIn("Short stepA", output)
        self.assertTrue(output.startswith("## (1) Short stepB"))

    def test_closed_input_aborts(self):
        pcd = _linear("stepA")
        with self.assertRaises(InputClosedError):
            _run(pcd, "\n")

    def test_undecodable_line_is_reported_and_reading_continues(self):
        pcd = _linear("stepA")
        pcd.stdin = io.TextIOWrapper(io.BytesIO(b"\xff\n\n\n"), encoding="utf-8")
        pcd.stdout = io.StringIO()

        pcd.execute()

        output = pcd.stdout.getvalue()
        self.assertEqual(output.count("Error reading input:"), 1)
        self.assertIn("Long stepA", output)
        self.assertTrue(output.endswith("Done.\n"))

    def test_unreached_skipto_target_is_logged(self):
        pcd = _linear("stepA")

        with self.assertLogs("donothing.walker", level="WARNING") as logs:
            output = _run(pcd, "skipto root.nowhere\n")

        self.assertIn("Never reached step 'root.nowhere'", "\n".join(logs.output))
        self.assertIn("Skipping step 'root.stepA' on the way to 'root.nowhere'\n", output)
        self.assertTrue(output.endswith("Done.\n"))

    def test_execute_checks_whole_procedure(self):
        pcd = _linear("stepA", "stepB")
        pcd.root_step.children[0].input_string("missing")
        with self.assertRaises(CheckError):
            _run(pcd, "\n", step_name="root.stepB")
        self.assertEqual(pcd.stdout.getvalue(), "")

    def test_execute_unknown_step(self):
        with self.assertRaises(StepNotFoundError):
            _run(_linear("stepA"), "\n", step_name="root.stepZ")


if __name__ == "__main__":
    unittest.main()
