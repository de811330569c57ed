"""Incremental TAP v13 parser."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from tapline.lines import TAP_HEADER, Fail, Other, Pass, TestTitle, classify, is_header
from tapline.model import Plan, Test, TestBuilder

if TYPE_CHECKING:
    from tapline.formatters.base import BaseFormatter


class InvalidHeaderError(ValueError):
    """The stream did not start with the TAP version 13 header."""

    def __init__(self, first_line: str | None) -> None:
        self.first_line = first_line
        super().__init__(f"Invalid TAP input, must start with '{TAP_HEADER}'")


class TapParser:
    """Builds tests from TAP lines and forwards events to a formatter.

    A parser handles exactly one stream: construct it with the first line,
    feed the remaining lines through :meth:`line`, then call
    :meth:`finalise` once.
    """

    def __init__(
        self,
        first_line: str | None,
        formatter: BaseFormatter,
        logger: logging.Logger | None = None,
    ) -> None:
        if not is_header(first_line):
            raise InvalidHeaderError(first_line)
        self.formatter = formatter
        self.logger = logger or logging.getLogger("tapline.parser")
        self._builders: list[TestBuilder] = []
        self._plan: Plan | None = None
        self._finalised = False

    @property
    def tests(self) -> list[Test]:
        return [b.build() for b in self._builders]

    @property
    def plan(self) -> Plan | None:
        return self._plan

    @property
    def finalised(self) -> bool:
        return self._finalised

    def line(self, raw: str) -> None:
        if self._finalised:
            raise RuntimeError("TapParser already finalised; start a new parser per stream")

        event = classify(raw)

        if isinstance(event, TestTitle):
            self.formatter.new_test(event.name)
            self._builders.append(TestBuilder().start(event.name))
            self.logger.debug("Opened test %r", event.name)
            return

        if not self._builders:
            self.logger.debug("Dropped line before any test title: %r", raw)
            return
        current = self._builders[-1]

        if isinstance(event, Pass):
            self.formatter.assertion(True, event.message)
            current.record(True, event.message)
        elif isinstance(event, Fail):
            self.formatter.assertion(False, event.message)
            current.record(False, event.message)
        elif isinstance(event, Plan):
            self._plan = event
            self.logger.debug("Plan set to %s", event)
        else:
            # A repeated header mid-stream is just diagnostic text
            text = event.text if isinstance(event, Other) else raw
            self.formatter.log_output(text)
            current.log(text)

    def finalise(self) -> None:
        if self._finalised:
            raise RuntimeError("TapParser already finalised")
        self._finalised = True
        tests = self.tests
        self.logger.debug(
            "Finalising: %d tests, plan %s", len(tests), self._plan or "absent"
        )
        self.formatter.summerise(self._plan, tests)


def _chomp(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def parse_stream(
    lines: Iterable[str],
    formatter: BaseFormatter,
    logger: logging.Logger | None = None,
) -> TapParser:
    """Drive a parser over ``lines`` one at a time and finalise it.

    Raises:
        InvalidHeaderError: If the first line is missing or not the header.
    """
    it = iter(lines)
    first = next(it, None)
    parser = TapParser(
        _chomp(first) if first is not None else None, formatter, logger=logger
    )
    for raw in it:
        parser.line(_chomp(raw))
    parser.finalise()
    return parser
