"""Pytest configuration and fixtures."""

import logging

import pytest

from tapline.formatters.base import BaseFormatter


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up tapline loggers after each test to prevent handler leaks."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("tapline")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


class RecordingFormatter(BaseFormatter):
    """Captures every formatter call in order as (method, args) tuples."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def new_test(self, name):
        self.calls.append(("new_test", (name,)))

    def assertion(self, passed, message):
        self.calls.append(("assertion", (passed, message)))

    def log_output(self, text):
        self.calls.append(("log_output", (text,)))

    def summerise(self, plan, tests):
        self.calls.append(("summerise", (plan, tests)))

    def methods(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def recorder():
    return RecordingFormatter()


class MarkupDecoration:
    """Decoration that wraps text in visible tags instead of ANSI codes."""

    def emphasize(self, text):
        return f"<u>{text}</u>"

    def positive(self, text):
        return f"<green>{text}</green>"

    def negative(self, text):
        return f"<red>{text}</red>"

    def caution(self, text):
        return f"<yellow>{text}</yellow>"


@pytest.fixture
def markup():
    return MarkupDecoration()
