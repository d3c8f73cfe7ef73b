"""An example do-nothing script.

The procedure is a little arithmetic trick: multiply your phone number (as a seven-digit number,
without its area code) by 8, then add up all the digits of your phone number, of 8, and of the
product. Keep adding up the digits of the sum until only one digit is left.

Run ``python -m donothing.example`` to walk through it, or add ``--markdown`` to print its
documentation.
"""

from __future__ import annotations

import sys

from .cli import handle_args
from .procedure import Procedure
from .step import Step


def build_procedure() -> Procedure:
    pcd = Procedure()
    pcd.short = "The magic of 8"
    pcd.long = """
        A trick that always lands on the same number, whatever your phone number is.
    """

    @pcd.add_step
    def input_phone_number(step: Step) -> None:
        step.name = "inputPhoneNumber"
        step.short = "Enter your phone number"
        step.long = """
            Write down your phone number without its area code. Formatting doesn't matter.
        """
        step.output_string("phoneNumber", "Your phone number")

    @pcd.add_step
    def multiply_phone_number(step: Step) -> None:
        step.name = "multiplyPhoneNumber"
        step.short = "Multiply your phone number by 8"
        step.input_string("phoneNumber")
        step.output_string("phoneNumberTimesEight", "Your phone number times 8")

    @pcd.add_step
    def add_digits(step: Step) -> None:
        step.name = "addDigits"
        step.short = "Add up the digits"
        step.long = """
            Add up every digit of:

                - your phone number,
                - 8, and
                - your phone number times 8.

            While the sum has more than one digit, add up its digits.
        """
        step.input_string("phoneNumber")
        step.input_string("phoneNumberTimesEight")
        step.output_int("finalDigit", "The single digit you ended up with")

    return pcd


def main() -> int:
    return handle_args(sys.argv, build_procedure(), default_step="root")


if __name__ == "__main__":
    raise SystemExit(main())
