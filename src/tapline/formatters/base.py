from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import typer

from tapline.decoration import PlainDecoration

if TYPE_CHECKING:
    from tapline.decoration import TextDecoration
    from tapline.model import Plan, Test


class BaseFormatter(ABC):
    """Receives parser events as they happen and renders them.

    Every method is called inline by the parser; nothing returned here
    affects parsing.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        decoration: TextDecoration | None = None,
        color: bool | None = None,
    ) -> None:
        self.out = out
        self.decoration = decoration or PlainDecoration()
        # None lets typer strip ANSI codes when the sink is not a terminal
        self.color = color

    @abstractmethod
    def new_test(self, name: str) -> None:
        """Called once per test title, before any of its assertions."""
        ...

    @abstractmethod
    def assertion(self, passed: bool, message: str) -> None:
        """Called once per ``ok`` / ``not ok`` line."""
        ...

    @abstractmethod
    def log_output(self, text: str) -> None:
        """Called for unrecognised lines while a test is open."""
        ...

    @abstractmethod
    def summerise(self, plan: Plan | None, tests: list[Test]) -> None:
        """Called once at end of stream with the final plan and tests."""
        ...

    def echo(self, text: str = "", nl: bool = True) -> None:
        # sys.stdout is looked up per call so captured/redirected output works
        typer.echo(text, file=self.out or sys.stdout, nl=nl, color=self.color)


def count_assertions(tests: list[Test]) -> tuple[int, int]:
    """Return (ran, failed) assertion counts across all tests."""
    ran = sum(len(t.assertions) for t in tests)
    failed = sum(1 for t in tests for a in t.assertions if not a.passed)
    return ran, failed
