"""Text decoration used by the formatters."""

from __future__ import annotations

from typing import Protocol

import typer


class TextDecoration(Protocol):
    def emphasize(self, text: str) -> str: ...

    def positive(self, text: str) -> str: ...

    def negative(self, text: str) -> str: ...

    def caution(self, text: str) -> str: ...


class AnsiDecoration:
    """Terminal colours via ``typer.style``."""

    def emphasize(self, text: str) -> str:
        return typer.style(text, underline=True)

    def positive(self, text: str) -> str:
        return typer.style(text, fg=typer.colors.GREEN)

    def negative(self, text: str) -> str:
        return typer.style(text, fg=typer.colors.RED)

    def caution(self, text: str) -> str:
        return typer.style(text, fg=typer.colors.YELLOW)


class PlainDecoration:
    def emphasize(self, text: str) -> str:
        return text

    def positive(self, text: str) -> str:
        return text

    def negative(self, text: str) -> str:
        return text

    def caution(self, text: str) -> str:
        return text


def get_decoration(color: bool) -> TextDecoration:
    return AnsiDecoration() if color else PlainDecoration()
