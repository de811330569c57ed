"""Parse TAP version 13 streams and render them through pluggable formatters."""

from tapline.lines import classify
from tapline.model import Assertion, Plan, Test, TestBuilder
from tapline.parser import InvalidHeaderError, TapParser, parse_stream

__all__ = [
    "Assertion",
    "InvalidHeaderError",
    "Plan",
    "TapParser",
    "Test",
    "TestBuilder",
    "classify",
    "parse_stream",
]
