"""Result model for parsed TAP streams."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Assertion:
    """A single ``ok`` / ``not ok`` line.

    Attributes:
        message: Description text with the status and ordinal stripped.
        passed: Whether the line was ``ok``.
    """

    message: str
    passed: bool


@dataclass(frozen=True)
class Plan:
    """The ``start..end`` range declared by a plan line."""

    start: int
    end: int

    @property
    def total(self) -> int:
        return max(self.end - self.start + 1, 0)

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Test:
    """A titled group of assertions.

    Attributes:
        name: Text of the ``# `` line that opened the test.
        assertions: Assertions in the order they were read.
        log: Unrecognised lines read while this test was current.
    """

    name: str
    assertions: tuple[Assertion, ...] = ()
    log: tuple[str, ...] = ()

    # not a pytest test class
    __test__ = False

    @property
    def passed(self) -> bool:
        return all(a.passed for a in self.assertions)

    @property
    def log_text(self) -> str:
        return "\n".join(self.log)


@dataclass
class TestBuilder:
    """Mutable state for the test currently being parsed."""

    name: str = ""
    assertions: list[Assertion] = field(default_factory=list)
    log_lines: list[str] = field(default_factory=list)
    passed: bool = True

    __test__ = False

    def start(self, name: str) -> TestBuilder:
        self.name = name
        self.assertions = []
        self.log_lines = []
        self.passed = True
        return self

    def record(self, passed: bool, message: str) -> TestBuilder:
        self.assertions.append(Assertion(message=message, passed=passed))
        self.passed = self.passed and passed
        return self

    def log(self, text: str) -> TestBuilder:
        self.log_lines.append(text)
        return self

    def build(self) -> Test:
        return Test(
            name=self.name,
            assertions=tuple(self.assertions),
            log=tuple(self.log_lines),
        )
