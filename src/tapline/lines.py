"""Classify raw TAP lines into protocol events."""

from __future__ import annotations

import re
from dataclasses import dataclass

from tapline.model import Plan

TAP_HEADER = "TAP version 13"

_PLAN_RE = re.compile(r"([+-]?\d+)\.\.([+-]?\d+)")


@dataclass(frozen=True)
class Header:
    pass


@dataclass(frozen=True)
class TestTitle:
    name: str

    __test__ = False


@dataclass(frozen=True)
class Pass:
    message: str


@dataclass(frozen=True)
class Fail:
    message: str


@dataclass(frozen=True)
class Other:
    text: str


LineEvent = Header | TestTitle | Pass | Fail | Plan | Other


def is_header(line: str | None) -> bool:
    return line == TAP_HEADER


def _words_from(line: str, index: int) -> str:
    # Drops the status token(s) and the ordinal that follows them
    return " ".join(line.split()[index:])


def parse_plan(line: str) -> Plan | None:
    """Return the plan declared by ``line``, or None if it is not ``<int>..<int>``."""
    match = _PLAN_RE.fullmatch(line)
    if match is None:
        return None
    return Plan(start=int(match.group(1)), end=int(match.group(2)))


def classify(line: str) -> LineEvent:
    """Map one line (without its newline) to exactly one event."""
    if is_header(line):
        return Header()
    if line.startswith("# "):
        return TestTitle(name=line[2:])
    if line.startswith("ok "):
        return Pass(message=_words_from(line, 2))
    if line.startswith("not ok "):
        return Fail(message=_words_from(line, 3))
    plan = parse_plan(line)
    if plan is not None:
        return plan
    return Other(text=line)
