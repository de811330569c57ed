"""Formatters with little or no output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tapline.formatters.base import BaseFormatter, count_assertions

if TYPE_CHECKING:
    from tapline.model import Plan, Test

NO_PLAN_MESSAGE = "No plan found, no report available."


class SilentFormatter(BaseFormatter):
    def new_test(self, name: str) -> None:
        pass

    def assertion(self, passed: bool, message: str) -> None:
        pass

    def log_output(self, text: str) -> None:
        pass

    def summerise(self, plan: Plan | None, tests: list[Test]) -> None:
        pass


class DotFormatter(BaseFormatter):
    """One glyph per assertion: ``.`` for pass, ``x`` for fail."""

    def new_test(self, name: str) -> None:
        pass

    def assertion(self, passed: bool, message: str) -> None:
        self.echo("." if passed else "x", nl=False)

    def log_output(self, text: str) -> None:
        pass

    def summerise(self, plan: Plan | None, tests: list[Test]) -> None:
        self.echo()
        if plan is None:
            self.echo(NO_PLAN_MESSAGE)
            return
        ran, failed = count_assertions(tests)
        self.echo(f"{ran} of {plan.total} assertions ran, {failed} failed")
