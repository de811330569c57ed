from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from tapline.formatters.base import BaseFormatter
from tapline.formatters.report import ReportFormatter, SpecFormatter
from tapline.formatters.simple import DotFormatter, SilentFormatter

if TYPE_CHECKING:
    from tapline.decoration import TextDecoration

_FORMATTERS: dict[str, type[BaseFormatter]] = {
    "silent": SilentFormatter,
    "dot": DotFormatter,
    "spec": SpecFormatter,
    "report": ReportFormatter,
}


def get_formatter(
    name: str,
    out: TextIO | None = None,
    decoration: TextDecoration | None = None,
    color: bool | None = None,
) -> BaseFormatter:
    cls = _FORMATTERS.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown formatter: {name!r}. "
            f"Available: {', '.join(sorted(_FORMATTERS))}"
        )
    return cls(out=out, decoration=decoration, color=color)


__all__ = [
    "BaseFormatter",
    "DotFormatter",
    "ReportFormatter",
    "SilentFormatter",
    "SpecFormatter",
    "get_formatter",
]
