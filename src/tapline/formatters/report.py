"""Formatters that describe individual assertions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tapline.formatters.base import BaseFormatter, count_assertions
from tapline.model import Assertion

if TYPE_CHECKING:
    from tapline.model import Plan, Test


def ran_line(plan: Plan | None, tests: list[Test]) -> str:
    ran, _ = count_assertions(tests)
    if plan is None:
        return f"Ran {ran} tests (no plan found)"
    return f"Ran {ran} of {plan.total} tests"


class _AssertionLines(BaseFormatter):
    def _title(self, name: str) -> None:
        self.echo()
        self.echo(self.decoration.emphasize(name))
        self.echo()

    def _assertion_line(self, assertion: Assertion) -> None:
        if assertion.passed:
            self.echo(f"\t ✅ {self.decoration.positive(assertion.message)}")
        else:
            self.echo(f"\t ❌ {self.decoration.negative(assertion.message)}")

    def _log_line(self, text: str) -> None:
        self.echo(f"\t {self.decoration.caution(text)}")


class SpecFormatter(_AssertionLines):
    """Prints every test title and assertion as it is read."""

    def new_test(self, name: str) -> None:
        self._title(name)

    def assertion(self, passed: bool, message: str) -> None:
        self._assertion_line(Assertion(message=message, passed=passed))

    def log_output(self, text: str) -> None:
        self._log_line(text)

    def summerise(self, plan: Plan | None, tests: list[Test]) -> None:
        self.echo()
        self.echo(ran_line(plan, tests))


class ReportFormatter(_AssertionLines):
    """Streams coloured glyphs, then details every failed test at the end."""

    def new_test(self, name: str) -> None:
        pass

    def assertion(self, passed: bool, message: str) -> None:
        glyph = self.decoration.positive(".") if passed else self.decoration.negative("x")
        self.echo(glyph, nl=False)

    def log_output(self, text: str) -> None:
        pass

    def summerise(self, plan: Plan | None, tests: list[Test]) -> None:
        self.echo()
        self.echo(ran_line(plan, tests))
        for test in tests:
            if test.passed:
                continue
            self._title(test.name)
            for text in test.log:
                self._log_line(text)
            for assertion in test.assertions:
                self._assertion_line(assertion)
